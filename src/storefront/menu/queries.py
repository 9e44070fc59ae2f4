"""Menu read side — listing, burger detail, builder ingredients and the home feed."""

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from storefront.catalogue.burger.burger import Burger, BurgerCategory
from storefront.catalogue.ingredient.ingredient import Ingredient, IngredientCategory
from storefront.reviews.queries import recent_reviews

RELATED_LIMIT = 4
FEATURED_LIMIT = 6
RECENT_REVIEWS_LIMIT = 5

_SORTS = {
    "price-low": (lambda b: (b.price, b.name.lower()), False),
    "price-high": (lambda b: (b.price, b.name.lower()), True),
    "rating": (lambda b: (b.rating or 0.0, b.review_count or 0), True),
    "name": (lambda b: b.name.lower(), False),
}
DEFAULT_SORT = "rating"


def burger_view(burger: Burger) -> dict:
    return {
        "burger_id": str(burger.id),
        "name": burger.name,
        "description": burger.description,
        "price": burger.price,
        "category": burger.category,
        "ingredient_ids": burger.ingredient_id_list,
        "image": burger.image,
        "rating": burger.rating,
        "review_count": burger.review_count,
        "is_active": burger.is_active,
        "preparation_time": burger.preparation_time,
    }


def ingredient_view(ingredient: Ingredient) -> dict:
    return {
        "ingredient_id": str(ingredient.id),
        "name": ingredient.name,
        "price": ingredient.price,
        "category": ingredient.category,
        "stock": ingredient.stock,
        "min_stock": ingredient.min_stock,
        "is_low_stock": ingredient.is_low_stock,
        "is_veg": ingredient.is_veg,
        "is_vegan": ingredient.is_vegan,
        "image": ingredient.image,
    }


def _category(value) -> BurgerCategory:
    try:
        return BurgerCategory(value)
    except ValueError:
        raise ValidationError({"category": [f"Unknown category: {value!r}"]}) from None


def list_burgers(category=None, search=None, sort=None) -> list[dict]:
    """Active burgers, optionally filtered by category and a case-insensitive search term."""
    sort = sort or DEFAULT_SORT
    if sort not in _SORTS:
        raise ValidationError({"sort": [f"Sort must be one of: {', '.join(_SORTS)}"]})

    burgers = current_domain.repository_for(Burger).active()

    if category:
        wanted = _category(category).value
        burgers = [b for b in burgers if b.category == wanted]

    if search:
        term = search.strip().lower()
        burgers = [b for b in burgers if term in b.name.lower() or term in (b.description or "").lower()]

    key, reverse = _SORTS[sort]
    return [burger_view(b) for b in sorted(burgers, key=key, reverse=reverse)]


def burger_detail(burger_id) -> dict:
    """Burger with its resolved ingredients and up to four related burgers of the same category."""
    burger = current_domain.repository_for(Burger).get(burger_id)
    if not burger.is_active:
        raise ObjectNotFoundError({"_entity": f"Burger {burger_id} not found"})

    ingredients = current_domain.repository_for(Ingredient).find_many(burger.ingredient_id_list)
    related = [
        b
        for b in current_domain.repository_for(Burger).active()
        if b.category == burger.category and str(b.id) != str(burger.id)
    ]
    related.sort(key=lambda b: (b.rating or 0.0), reverse=True)

    return {
        "burger": burger_view(burger),
        "ingredients": [ingredient_view(ingredients[i]) for i in burger.ingredient_id_list if i in ingredients],
        "related": [burger_view(b) for b in related[:RELATED_LIMIT]],
    }


def builder_ingredients() -> dict[IngredientCategory, list[dict]]:
    """In-stock ingredients grouped by category, names sorted within each group."""
    grouped: dict[IngredientCategory, list[dict]] = {category: [] for category in IngredientCategory}
    in_stock = [i for i in current_domain.repository_for(Ingredient).everything() if (i.stock or 0) > 0]
    for ingredient in sorted(in_stock, key=lambda i: i.name.lower()):
        grouped[IngredientCategory(ingredient.category)].append(ingredient_view(ingredient))
    return grouped


def home_feed() -> dict:
    burgers = sorted(
        current_domain.repository_for(Burger).active(),
        key=lambda b: (b.rating or 0.0, b.review_count or 0),
        reverse=True,
    )
    return {
        "featured_burgers": [burger_view(b) for b in burgers[:FEATURED_LIMIT]],
        "recent_reviews": recent_reviews(RECENT_REVIEWS_LIMIT),
    }
