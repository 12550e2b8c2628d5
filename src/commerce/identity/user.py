"""User aggregate — the customers and administrators orders and reviews refer to."""

from datetime import UTC, datetime

from protean.fields import DateTime, String, ValueObject

from commerce.domain import commerce
from commerce.identity.email import EmailAddress
from commerce.shared.access import Role


@commerce.aggregate
class User:
    name = String(required=True, min_length=2, max_length=50)
    email = ValueObject(EmailAddress, required=True)
    role = String(choices=Role, default=Role.CUSTOMER.value)
    created_at = DateTime()

    @classmethod
    def register(cls, name, email, role=Role.CUSTOMER.value):
        return cls(
            name=name,
            email=EmailAddress.normalized(email),
            role=role,
            created_at=datetime.now(UTC),
        )
