"""Catalog-backed quoting: resolve snapshots from repositories, then run the pure engine."""

from collections.abc import Iterable, Mapping

from protean.utils.globals import current_domain

from storefront.catalogue.burger.burger import Burger
from storefront.catalogue.ingredient.ingredient import Ingredient
from storefront.pricing.engine import (
    BurgerSnapshot,
    CartQuote,
    CustomBurgerQuote,
    IngredientSnapshot,
    parse_cart,
    price_cart,
    price_custom_burger,
    referenced_ids,
)
from storefront.settings import pricing_policy


def burger_snapshots(burger_ids: Iterable[str]) -> dict[str, BurgerSnapshot]:
    burgers = current_domain.repository_for(Burger).find_many(burger_ids)
    return {
        burger_id: BurgerSnapshot(id=burger_id, name=b.name, price=b.price, is_active=bool(b.is_active))
        for burger_id, b in burgers.items()
    }


def ingredient_snapshots(ingredient_ids: Iterable[str]) -> dict[str, IngredientSnapshot]:
    ingredients = current_domain.repository_for(Ingredient).find_many(ingredient_ids)
    return {
        ingredient_id: IngredientSnapshot(id=ingredient_id, name=i.name, price=i.price, category=i.category)
        for ingredient_id, i in ingredients.items()
    }


def quote_cart(items: Iterable[Mapping]) -> CartQuote:
    """Price a raw cart (list of dicts) against the current catalog."""
    lines = parse_cart(items)
    burger_ids, ingredient_ids = referenced_ids(lines)
    return price_cart(
        lines,
        burger_snapshots(burger_ids),
        ingredient_snapshots(ingredient_ids),
        pricing_policy(),
    )


def quote_custom_burger(ingredient_ids: Iterable[str]) -> CustomBurgerQuote:
    """Burger-builder price preview for one custom burger."""
    ingredient_ids = [str(i) for i in ingredient_ids or []]
    return price_custom_burger(ingredient_ids, ingredient_snapshots(ingredient_ids), pricing_policy())
