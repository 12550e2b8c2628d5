"""RegisterUser — create a customer or administrator account record."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from commerce.domain import commerce
from commerce.identity.email import EmailAddress
from commerce.identity.user import User
from commerce.shared.access import Role
from commerce.shared.errors import NotFound

logger = structlog.get_logger(__name__)


@commerce.command(part_of="User")
class RegisterUser:
    name = String(required=True, min_length=2, max_length=50)
    email = String(required=True, max_length=254)
    role = String(choices=Role, default=Role.CUSTOMER.value)


@commerce.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        email = EmailAddress.normalized(command.email)

        repo = current_domain.repository_for(User)
        if repo._dao.query.filter(email_address=email.address).all().items:
            raise ValidationError({"email": ["Email is already registered"]})

        user = User.register(name=command.name, email=email.address, role=command.role)
        repo.add(user)
        logger.info("user_registered", user_id=str(user.id), role=user.role)
        return str(user.id)


def load_user(user_id) -> User:
    user = current_domain.repository_for(User).get_or_none(str(user_id))
    if user is None:
        raise NotFound("User", user_id)
    return user
