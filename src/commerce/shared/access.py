"""Actor roles and the ownership checks shared by order and review handlers."""

from enum import Enum

from commerce.shared.errors import Unauthorized


class Role(Enum):
    CUSTOMER = "Customer"
    ADMIN = "Admin"


def is_admin(actor_role) -> bool:
    return actor_role == Role.ADMIN.value


def require_admin(actor_role, action: str) -> None:
    if not is_admin(actor_role):
        raise Unauthorized(f"Only administrators may {action}")


def require_owner_or_admin(owner_id, actor_id, actor_role, action: str) -> None:
    if str(owner_id) != str(actor_id) and not is_admin(actor_role):
        raise Unauthorized(f"You are not authorized to {action}")
