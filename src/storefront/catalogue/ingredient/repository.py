"""Repository for the Ingredient aggregate."""

from storefront.catalogue.ingredient.ingredient import Ingredient
from storefront.domain import storefront
from storefront.utils.query import fetch_all


@storefront.repository(part_of=Ingredient)
class IngredientRepository:
    def everything(self) -> list[Ingredient]:
        return fetch_all(self._dao.query)

    def find_by_name(self, name: str) -> Ingredient | None:
        wanted = (name or "").strip()
        if not wanted:
            return None
        return self._dao.query.filter(name__iexact=wanted).all().first

    def find_many(self, ingredient_ids) -> dict[str, Ingredient]:
        """Map each resolvable id to its Ingredient; unknown ids are left out."""
        wanted = sorted({str(i) for i in ingredient_ids})
        if not wanted:
            return {}
        return {str(i.id): i for i in fetch_all(self._dao.query.filter(id__in=wanted))}
