"""Application tests for RegisterUser."""

import pytest
from commerce.identity.registration import RegisterUser
from commerce.identity.user import User
from protean import current_domain
from protean.exceptions import ValidationError


def _register(**overrides):
    defaults = {"name": "Robin", "email": "robin@example.com"}
    defaults.update(overrides)
    return current_domain.process(RegisterUser(**defaults), asynchronous=False)


def test_registers_customer_with_normalized_email():
    user_id = _register(email="  Robin@Example.COM ")

    user = current_domain.repository_for(User).get(user_id)
    assert user.email.address == "robin@example.com"
    assert user.role == "Customer"


def test_registers_admin():
    user_id = _register(role="Admin")
    assert current_domain.repository_for(User).get(user_id).role == "Admin"


def test_duplicate_email_rejected():
    _register()
    with pytest.raises(ValidationError) as exc:
        _register(name="Another Robin", email="ROBIN@example.com")
    assert "email" in exc.value.messages


def test_email_must_contain_at_sign():
    with pytest.raises(ValidationError):
        _register(email="robin.example.com")
    assert current_domain.repository_for(User)._dao.query.all().total == 0


def test_malformed_domain_rejected():
    with pytest.raises(ValidationError) as exc:
        _register(email="robin@example..com")
    assert "email" in exc.value.messages
