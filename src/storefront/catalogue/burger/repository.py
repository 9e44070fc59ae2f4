"""Repository for the Burger aggregate."""

from storefront.catalogue.burger.burger import Burger
from storefront.domain import storefront
from storefront.utils.query import fetch_all


@storefront.repository(part_of=Burger)
class BurgerRepository:
    def everything(self) -> list[Burger]:
        return fetch_all(self._dao.query)

    def active(self) -> list[Burger]:
        return fetch_all(self._dao.query.filter(is_active=True))

    def find_many(self, burger_ids) -> dict[str, Burger]:
        """Map each resolvable id to its Burger; unknown ids are left out."""
        wanted = sorted({str(i) for i in burger_ids})
        if not wanted:
            return {}
        return {str(b.id): b for b in fetch_all(self._dao.query.filter(id__in=wanted))}
