"""Pricing engine — pure functions from catalog snapshots and a cart to a quote.

Nothing in this module touches a repository. Callers resolve the burgers and
ingredients a cart references (see ``storefront.pricing.service``) and hand
them in as snapshot mappings keyed by id, which keeps every computation here
deterministic and trivially testable.

Rules:
    catalog burger:  line_total = burger.price * quantity
    custom burger:   unit_price = base_price + sum(distinct ingredient prices)
                     line_total = unit_price * quantity
    subtotal      = sum(line_total)
    delivery_fee  = 0 when subtotal >= free_delivery_threshold, else delivery_fee
    total_amount  = subtotal + delivery_fee

Amounts are summed as Decimal and quantized to paise (two places, half-up)
before any comparison; quotes carry plain floats.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

from protean.exceptions import ValidationError

DEFAULT_CUSTOM_NAME = "Custom Burger"

_PAISE = Decimal("0.01")


def to_money(amount) -> Decimal:
    """Quantize an amount to two places; floats go through their shortest repr."""
    if not isinstance(amount, Decimal):
        amount = Decimal(str(amount))
    return amount.quantize(_PAISE, rounding=ROUND_HALF_UP)


class ItemKind(Enum):
    BURGER = "burger"
    CUSTOM = "custom"


@dataclass(frozen=True)
class PricingPolicy:
    custom_burger_base_price: float = 50.0
    free_delivery_threshold: float = 500.0
    delivery_fee: float = 40.0
    currency: str = "INR"

    def delivery_fee_for(self, subtotal) -> float:
        if to_money(subtotal) >= to_money(self.free_delivery_threshold):
            return 0.0
        return float(to_money(self.delivery_fee))


# ---------------------------------------------------------------------------
# Catalog snapshots
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class BurgerSnapshot:
    id: str
    name: str
    price: float
    is_active: bool = True


@dataclass(frozen=True)
class IngredientSnapshot:
    id: str
    name: str
    price: float
    category: str | None = None


# ---------------------------------------------------------------------------
# Cart lines
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class BurgerLine:
    burger_id: str
    quantity: int = 1

    kind = ItemKind.BURGER


@dataclass(frozen=True)
class CustomLine:
    ingredient_ids: tuple[str, ...]
    quantity: int = 1
    name: str = DEFAULT_CUSTOM_NAME

    kind = ItemKind.CUSTOM


CartLine = BurgerLine | CustomLine


# ---------------------------------------------------------------------------
# Quotes
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class PricedLine:
    kind: ItemKind
    title: str
    quantity: int
    unit_price: float
    line_total: float
    burger_id: str | None = None
    ingredient_ids: tuple[str, ...] = ()
    ingredients_price: float = 0.0

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "title": self.title,
            "quantity": self.quantity,
            "unit_price": self.unit_price,
            "line_total": self.line_total,
            "burger_id": self.burger_id,
            "ingredient_ids": list(self.ingredient_ids),
            "ingredients_price": self.ingredients_price,
        }


@dataclass(frozen=True)
class CustomBurgerQuote:
    base_price: float
    ingredients_price: float
    total_price: float
    ingredients: tuple[IngredientSnapshot, ...] = ()


@dataclass(frozen=True)
class CartQuote:
    lines: tuple[PricedLine, ...]
    subtotal: float
    delivery_fee: float
    total_amount: float
    currency: str = "INR"
    notes: list[str] = field(default_factory=list, compare=False)


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------
def _quantity(raw, position: int) -> int:
    if raw is None:
        return 1
    if isinstance(raw, bool):
        raise ValidationError({"items": [f"Item {position}: quantity must be a whole number"]})
    try:
        quantity = int(raw)
    except (TypeError, ValueError):
        raise ValidationError({"items": [f"Item {position}: quantity must be a whole number"]}) from None
    if quantity != raw and not isinstance(raw, str):
        raise ValidationError({"items": [f"Item {position}: quantity must be a whole number"]})
    if quantity < 1:
        raise ValidationError({"items": [f"Item {position}: quantity must be at least 1"]})
    return quantity


def parse_cart(items: Iterable[Mapping]) -> list[CartLine]:
    """Turn raw cart dictionaries into typed lines.

    A line is a burger line when it names a ``burger_id`` and a custom line
    when it carries ``ingredient_ids``. An explicit ``kind`` wins; a line
    with both shapes or neither is rejected.
    """
    lines: list[CartLine] = []
    for position, item in enumerate(items or [], start=1):
        if not isinstance(item, Mapping):
            raise ValidationError({"items": [f"Item {position}: expected an object"]})

        has_burger = bool(item.get("burger_id"))
        has_ingredients = item.get("ingredient_ids") is not None
        kind = item.get("kind")

        if kind is None:
            if has_burger == has_ingredients:
                raise ValidationError(
                    {"items": [f"Item {position}: provide either burger_id or ingredient_ids"]}
                )
            kind = ItemKind.BURGER.value if has_burger else ItemKind.CUSTOM.value

        quantity = _quantity(item.get("quantity"), position)

        if kind == ItemKind.BURGER.value:
            if not has_burger or has_ingredients:
                raise ValidationError({"items": [f"Item {position}: a burger item needs only a burger_id"]})
            lines.append(BurgerLine(burger_id=str(item["burger_id"]), quantity=quantity))
        elif kind == ItemKind.CUSTOM.value:
            if has_burger:
                raise ValidationError({"items": [f"Item {position}: a custom item cannot reference a burger"]})
            ingredient_ids = item.get("ingredient_ids") or []
            if isinstance(ingredient_ids, str) or not isinstance(ingredient_ids, Iterable):
                raise ValidationError({"items": [f"Item {position}: ingredient_ids must be a list"]})
            lines.append(
                CustomLine(
                    ingredient_ids=tuple(str(i) for i in ingredient_ids),
                    quantity=quantity,
                    name=(item.get("name") or DEFAULT_CUSTOM_NAME).strip() or DEFAULT_CUSTOM_NAME,
                )
            )
        else:
            raise ValidationError({"items": [f"Item {position}: unknown item kind {kind!r}"]})

    return lines


def referenced_ids(lines: Iterable[CartLine]) -> tuple[set[str], set[str]]:
    """Collect the burger ids and ingredient ids a cart refers to."""
    burger_ids: set[str] = set()
    ingredient_ids: set[str] = set()
    for line in lines:
        if isinstance(line, BurgerLine):
            burger_ids.add(line.burger_id)
        else:
            ingredient_ids.update(line.ingredient_ids)
    return burger_ids, ingredient_ids


# ---------------------------------------------------------------------------
# Pricing
# ---------------------------------------------------------------------------
def _distinct(ids: Iterable[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(ids))


def price_custom_burger(
    ingredient_ids: Iterable[str],
    ingredients: Mapping[str, IngredientSnapshot],
    policy: PricingPolicy,
) -> CustomBurgerQuote:
    """Price one custom burger from its ingredient selection.

    Duplicate ingredient ids are counted once; the order of first
    appearance is preserved in the returned ingredient list.
    """
    selection = _distinct(ingredient_ids)
    if not selection:
        raise ValidationError({"ingredient_ids": ["Select at least one ingredient"]})

    missing = [i for i in selection if i not in ingredients]
    if missing:
        raise ValidationError({"ingredient_ids": [f"Unknown ingredient: {i}" for i in missing]})

    resolved = tuple(ingredients[i] for i in selection)
    base_price = to_money(policy.custom_burger_base_price)
    ingredients_price = to_money(sum(to_money(i.price) for i in resolved))
    return CustomBurgerQuote(
        base_price=float(base_price),
        ingredients_price=float(ingredients_price),
        total_price=float(base_price + ingredients_price),
        ingredients=resolved,
    )


def price_line(
    line: CartLine,
    burgers: Mapping[str, BurgerSnapshot],
    ingredients: Mapping[str, IngredientSnapshot],
    policy: PricingPolicy,
) -> PricedLine:
    if line.quantity < 1:
        raise ValidationError({"quantity": ["Quantity must be at least 1"]})

    if isinstance(line, BurgerLine):
        burger = burgers.get(line.burger_id)
        if burger is None:
            raise ValidationError({"burger_id": [f"Unknown burger: {line.burger_id}"]})
        if not burger.is_active:
            raise ValidationError({"burger_id": [f"{burger.name} is not available"]})
        return PricedLine(
            kind=ItemKind.BURGER,
            title=burger.name,
            quantity=line.quantity,
            unit_price=float(to_money(burger.price)),
            line_total=float(to_money(to_money(burger.price) * line.quantity)),
            burger_id=burger.id,
        )

    quote = price_custom_burger(line.ingredient_ids, ingredients, policy)
    return PricedLine(
        kind=ItemKind.CUSTOM,
        title=line.name,
        quantity=line.quantity,
        unit_price=quote.total_price,
        line_total=float(to_money(to_money(quote.total_price) * line.quantity)),
        ingredient_ids=tuple(i.id for i in quote.ingredients),
        ingredients_price=quote.ingredients_price,
    )


def price_cart(
    lines: Iterable[CartLine],
    burgers: Mapping[str, BurgerSnapshot],
    ingredients: Mapping[str, IngredientSnapshot],
    policy: PricingPolicy,
) -> CartQuote:
    """Compute the full quote for a cart.

    Raises ValidationError for an empty cart or any line that does not
    resolve against the supplied snapshots.
    """
    lines = list(lines)
    if not lines:
        raise ValidationError({"items": ["Cart is empty"]})

    priced = tuple(price_line(line, burgers, ingredients, policy) for line in lines)
    subtotal = to_money(sum(to_money(line.line_total) for line in priced))
    delivery_fee = to_money(policy.delivery_fee_for(subtotal))

    notes = []
    if delivery_fee:
        remaining = to_money(policy.free_delivery_threshold) - subtotal
        notes.append(f"Add {policy.currency} {float(remaining):g} more for free delivery")

    return CartQuote(
        lines=priced,
        subtotal=float(subtotal),
        delivery_fee=float(delivery_fee),
        total_amount=float(subtotal + delivery_fee),
        currency=policy.currency,
        notes=notes,
    )
