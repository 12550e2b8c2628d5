"""Tests for role checks and collaborator wiring."""

import pytest
from commerce.reviews.sanitizer import WordListSanitizer
from commerce.shared.access import is_admin, require_admin, require_owner_or_admin
from commerce.shared.errors import Unauthorized
from commerce.shared.services import get_services
from protean import current_domain


class TestAccess:
    def test_is_admin(self):
        assert is_admin("Admin") is True
        assert is_admin("Customer") is False
        assert is_admin(None) is False

    def test_require_admin(self):
        require_admin("Admin", "do things")
        with pytest.raises(Unauthorized):
            require_admin("Customer", "do things")

    def test_owner_or_admin(self):
        require_owner_or_admin("user-1", "user-1", "Customer", "view")
        require_owner_or_admin("user-1", "admin-1", "Admin", "view")
        with pytest.raises(Unauthorized):
            require_owner_or_admin("user-1", "user-2", "Customer", "view")


class TestServices:
    def test_installed_services_are_returned(self, services):
        assert get_services() is services

    def test_defaults_installed_on_first_use(self):
        delattr(current_domain._get_current_object(), "services")

        services = get_services()

        assert isinstance(services.sanitizer, WordListSanitizer)
        assert services.sanitizer.words == ["fake", "garbage", "scam"]
        assert services.notifications.shop_name == "Commerce"
        assert get_services() is services
