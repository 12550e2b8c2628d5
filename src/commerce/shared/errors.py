"""Error kinds raised by commerce operations.

Each kind extends the matching protean exception, so callers can catch either
the specific kind or the framework base class.
"""

from protean.exceptions import (
    InvalidOperationError,
    InvalidStateError,
    ObjectNotFoundError,
    ProteanException,
    ValidationError,
)

__all__ = [
    "DuplicateReview",
    "ExternalServiceFailure",
    "InsufficientStock",
    "InvalidStateTransition",
    "NotFound",
    "Unauthorized",
    "ValidationError",
]


class NotFound(ObjectNotFoundError):
    """A product, order, cart, review or user does not exist."""

    def __init__(self, kind: str, identifier) -> None:
        self.kind = kind
        self.identifier = str(identifier)
        super().__init__(f"{kind} `{identifier}` not found")


class InsufficientStock(ValidationError):
    def __init__(self, product_id, requested: int, available: int, name: str | None = None) -> None:
        self.product_id = str(product_id)
        self.requested = requested
        self.available = available
        label = name or self.product_id
        super().__init__({"stock": [f"Insufficient stock for {label}: requested {requested}, available {available}"]})


class DuplicateReview(ValidationError):
    def __init__(self, user_id, product_id) -> None:
        self.user_id = str(user_id)
        self.product_id = str(product_id)
        super().__init__({"review": ["You have already reviewed this product"]})


class Unauthorized(InvalidOperationError):
    """The actor may not perform the operation."""


class InvalidStateTransition(InvalidStateError):
    def __init__(self, current: str, target: str) -> None:
        self.current = current
        self.target = target
        super().__init__(f"Cannot transition from {current} to {target}")


class ExternalServiceFailure(ProteanException):
    """An email or PDF collaborator failed."""

    def __init__(self, service: str, reason: str) -> None:
        self.service = service
        self.reason = reason
        super().__init__(f"{service} failed: {reason}")
