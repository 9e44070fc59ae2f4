"""FastAPI routes for browsing the menu and pricing without ordering."""

from fastapi import APIRouter

from storefront.api.schemas import (
    CartQuoteRequest,
    CartQuoteResponse,
    CustomBurgerQuoteRequest,
    CustomBurgerQuoteResponse,
    PricedLineResponse,
    QuotedIngredient,
)
from storefront.menu.queries import builder_ingredients, burger_detail, home_feed, list_burgers
from storefront.pricing.service import quote_cart, quote_custom_burger
from storefront.reviews.queries import burger_reviews

menu_router = APIRouter(prefix="/menu", tags=["menu"])
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@menu_router.get("/home")
async def get_home_feed() -> dict:
    """Top-rated burgers and the latest reviews."""
    return home_feed()


@menu_router.get("/burgers")
async def get_burgers(category: str | None = None, search: str | None = None, sort: str | None = None) -> list[dict]:
    return list_burgers(category=category, search=search, sort=sort)


@menu_router.get("/burgers/{burger_id}")
async def get_burger(burger_id: str) -> dict:
    return burger_detail(burger_id)


@menu_router.get("/burgers/{burger_id}/reviews")
async def get_burger_reviews(burger_id: str, page: int = 1, limit: int = 10) -> dict:
    return burger_reviews(burger_id, page=page, limit=limit)


@menu_router.get("/ingredients")
async def get_builder_ingredients() -> dict:
    """In-stock ingredients for the burger builder, grouped by category."""
    return {category.value: items for category, items in builder_ingredients().items()}


@menu_router.post("/custom-burger/quote", response_model=CustomBurgerQuoteResponse)
async def quote_custom(body: CustomBurgerQuoteRequest) -> CustomBurgerQuoteResponse:
    quote = quote_custom_burger(body.ingredient_ids)
    return CustomBurgerQuoteResponse(
        base_price=quote.base_price,
        ingredients_price=quote.ingredients_price,
        total_price=quote.total_price,
        ingredients=[
            QuotedIngredient(ingredient_id=i.id, name=i.name, price=i.price, category=i.category)
            for i in quote.ingredients
        ],
    )


@cart_router.post("/quote", response_model=CartQuoteResponse)
async def quote(body: CartQuoteRequest) -> CartQuoteResponse:
    """Price a client-held cart against the current menu."""
    items = [item.model_dump(exclude_none=True) for item in body.items]
    result = quote_cart(items)
    return CartQuoteResponse(
        lines=[PricedLineResponse(**line.to_dict()) for line in result.lines],
        subtotal=result.subtotal,
        delivery_fee=result.delivery_fee,
        total_amount=result.total_amount,
        currency=result.currency,
        notes=result.notes,
    )
