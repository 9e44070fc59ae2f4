"""User aggregate root — customers and store administrators."""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, String, ValueObject

from storefront.domain import storefront
from storefront.identity.user.events import UserDeactivated, UserRegistered
from storefront.shared.email import EmailAddress
from storefront.shared.phone import validate_mobile


class UserRole(Enum):
    CUSTOMER = "customer"
    ADMIN = "admin"


@storefront.aggregate
class User:
    """A registered person who can order, review, or administer the store.

    Email is unique across users (checked by the registration handler).
    Deactivated users keep their history but are treated as anonymous callers.
    """

    name: String(required=True, max_length=50)
    email: ValueObject(EmailAddress, required=True)
    phone: String(required=True, max_length=10)
    address: String(max_length=500)
    role: String(choices=UserRole, default=UserRole.CUSTOMER.value)
    is_active: Boolean(default=True)
    created_at: DateTime()

    @invariant.post
    def name_must_have_at_least_two_characters(self):
        if self.name is not None and len(self.name.strip()) < 2:
            raise ValidationError({"name": ["Name must be at least 2 characters"]})

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    @classmethod
    def register(cls, name, email, phone, address=None, role=None):
        now = datetime.now(UTC)
        user = cls(
            name=name.strip() if name else name,
            email=EmailAddress.parse(email),
            phone=validate_mobile(phone),
            address=address,
            role=role or UserRole.CUSTOMER.value,
            created_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=user.id,
                name=user.name,
                email=user.email.address,
                role=user.role,
                registered_at=now,
            )
        )
        return user

    def deactivate(self):
        if not self.is_active:
            return
        now = datetime.now(UTC)
        self.is_active = False
        self.raise_(UserDeactivated(user_id=self.id, deactivated_at=now))
