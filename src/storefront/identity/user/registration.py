"""User registration and deactivation — commands and handler."""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.identity.user.user import User, UserRole
from storefront.shared.errors import ConflictError

logger = structlog.get_logger(__name__)


@storefront.command(part_of="User")
class RegisterUser:
    """Create a new user account."""

    name: String(required=True, max_length=50)
    email: String(required=True, max_length=254)
    phone: String(required=True, max_length=15)
    address: String(max_length=500)
    role: String(choices=UserRole, default=UserRole.CUSTOMER.value)


@storefront.command(part_of="User")
class DeactivateUser:
    user_id: Identifier(required=True)


@storefront.command_handler(part_of=User)
class UserAccountHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        repo = current_domain.repository_for(User)
        if repo.find_by_email(command.email) is not None:
            raise ConflictError({"email": ["User already exists with this email"]})

        user = User.register(
            name=command.name,
            email=command.email,
            phone=command.phone,
            address=command.address,
            role=command.role,
        )
        repo.add(user)
        logger.info("user_registered", user_id=str(user.id), role=user.role)
        return str(user.id)

    @handle(DeactivateUser)
    def deactivate_user(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.deactivate()
        repo.add(user)
        logger.info("user_deactivated", user_id=str(user.id))
