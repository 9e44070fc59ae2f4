"""Identity port — resolves the caller of an HTTP request.

Authentication happens upstream (a gateway or session layer); this port only
turns whatever that layer hands over into a ``Caller``. The default adapter
trusts the ``X-User-Id`` header and looks the user up, so the role always
comes from the stored account rather than from the request.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.identity.user.user import User, UserRole

USER_ID_HEADER = "X-User-Id"


@dataclass(frozen=True)
class Caller:
    user_id: str | None = None
    role: str | None = None
    name: str | None = None
    email: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value


ANONYMOUS = Caller()


class IdentityPort(ABC):
    """Abstract interface for caller resolution."""

    @abstractmethod
    def resolve(self, headers) -> Caller:
        """Return the Caller for a request's headers, or ANONYMOUS."""
        ...


class HeaderIdentityAdapter(IdentityPort):
    """Resolve the caller from the ``X-User-Id`` header against the User repository.

    Unknown and deactivated users resolve as anonymous.
    """

    def resolve(self, headers) -> Caller:
        user_id = headers.get(USER_ID_HEADER)
        if not user_id:
            return ANONYMOUS

        try:
            user = current_domain.repository_for(User).get(user_id)
        except ObjectNotFoundError:
            return ANONYMOUS

        if not user.is_active:
            return ANONYMOUS

        return Caller(
            user_id=str(user.id),
            role=user.role,
            name=user.name,
            email=user.email.address if user.email else None,
        )
