"""EmailAddress value object for validated email addresses."""

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import String

from commerce.domain import commerce

_FORBIDDEN = (" ", "\t", "\n", ";", ",", "(", ")", '"', ":", "<", ">", "[", "]", "\\")


@commerce.value_object
class EmailAddress:
    """A structurally valid address: one ``@``, a local part, and a dotted domain
    whose labels neither start nor end with a hyphen."""

    address = String(required=True, max_length=254)

    @classmethod
    def normalized(cls, raw):
        return cls(address=raw.strip().lower())

    @invariant.post
    def verify_email_address(self):
        email = self.address
        if email is None:
            return

        error = ValidationError({"email": ["Please provide a valid email"]})

        if email.count("@") != 1 or any(char in email for char in _FORBIDDEN):
            raise error

        local_part, domain_part = email.split("@", 1)
        if not local_part or local_part.startswith(".") or local_part.endswith("."):
            raise error
        if "." not in domain_part or ".." in email:
            raise error

        for label in domain_part.split("."):
            if not label or label.startswith("-") or label.endswith("-"):
                raise error
