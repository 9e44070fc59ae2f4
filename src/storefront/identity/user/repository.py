"""Repository for the User aggregate."""

from storefront.domain import storefront
from storefront.identity.user.user import User, UserRole
from storefront.shared.email import normalize_email
from storefront.utils.query import fetch_all


@storefront.repository(part_of=User)
class UserRepository:
    def everything(self) -> list[User]:
        return fetch_all(self._dao.query)

    def find_by_email(self, email: str) -> User | None:
        wanted = normalize_email(email)
        if not wanted:
            return None
        # EmailAddress is stored flattened as ``email_address``
        return self._dao.query.filter(email_address=wanted).all().first

    def find_many(self, user_ids) -> dict[str, User]:
        wanted = sorted({str(i) for i in user_ids})
        if not wanted:
            return {}
        return {str(u.id): u for u in fetch_all(self._dao.query.filter(id__in=wanted))}

    def count_customers(self) -> int:
        return self._dao.query.filter(role=UserRole.CUSTOMER.value).all().total
