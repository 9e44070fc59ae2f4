"""Pricing engine — pure quote computation from snapshots."""

import pytest
from protean.exceptions import ValidationError

from storefront.pricing.engine import (
    BurgerLine,
    BurgerSnapshot,
    CustomLine,
    IngredientSnapshot,
    ItemKind,
    PricingPolicy,
    parse_cart,
    price_cart,
    price_custom_burger,
    referenced_ids,
    to_money,
)

POLICY = PricingPolicy()

BURGERS = {
    "b-classic": BurgerSnapshot(id="b-classic", name="Classic Veg", price=150.0),
    "b-zinger": BurgerSnapshot(id="b-zinger", name="Chicken Zinger", price=250.0),
    "b-retired": BurgerSnapshot(id="b-retired", name="Old Timer", price=99.0, is_active=False),
}

INGREDIENTS = {
    "i-bun": IngredientSnapshot(id="i-bun", name="Bun", price=0.0, category="bread"),
    "i-cheese": IngredientSnapshot(id="i-cheese", name="Cheese", price=20.0, category="cheese"),
    "i-lettuce": IngredientSnapshot(id="i-lettuce", name="Lettuce", price=10.0, category="vegetable"),
}


def _quote(items):
    return price_cart(parse_cart(items), BURGERS, INGREDIENTS, POLICY)


class TestCustomBurgerPrice:
    def test_base_price_plus_ingredients(self):
        quote = price_custom_burger(["i-bun", "i-cheese", "i-lettuce"], INGREDIENTS, POLICY)
        assert quote.base_price == 50.0
        assert quote.ingredients_price == 30.0
        assert quote.total_price == 80.0

    def test_duplicate_ingredients_count_once(self):
        quote = price_custom_burger(["i-cheese", "i-cheese", "i-bun"], INGREDIENTS, POLICY)
        assert quote.ingredients_price == 20.0
        assert [i.id for i in quote.ingredients] == ["i-cheese", "i-bun"]

    def test_empty_selection_rejected(self):
        with pytest.raises(ValidationError) as exc:
            price_custom_burger([], INGREDIENTS, POLICY)
        assert exc.value.messages == {"ingredient_ids": ["Select at least one ingredient"]}

    def test_unknown_ingredient_rejected(self):
        with pytest.raises(ValidationError) as exc:
            price_custom_burger(["i-bun", "i-ghost"], INGREDIENTS, POLICY)
        assert exc.value.messages == {"ingredient_ids": ["Unknown ingredient: i-ghost"]}

    def test_base_price_follows_policy(self):
        policy = PricingPolicy(custom_burger_base_price=70.0)
        assert price_custom_burger(["i-cheese"], INGREDIENTS, policy).total_price == 90.0


class TestCartQuote:
    def test_two_custom_burgers_below_threshold(self):
        quote = _quote([{"ingredient_ids": ["i-bun", "i-cheese", "i-lettuce"], "quantity": 2}])

        (line,) = quote.lines
        assert line.kind is ItemKind.CUSTOM
        assert line.unit_price == 80.0
        assert line.line_total == 160.0
        assert quote.subtotal == 160.0
        assert quote.delivery_fee == 40.0
        assert quote.total_amount == 200.0
        assert quote.notes == ["Add INR 340 more for free delivery"]

    def test_free_delivery_at_threshold(self):
        quote = _quote([{"burger_id": "b-zinger", "quantity": 2}])
        assert quote.subtotal == 500.0
        assert quote.delivery_fee == 0.0
        assert quote.total_amount == 500.0
        assert quote.notes == []

    def test_just_below_threshold_pays_delivery(self):
        quote = _quote([{"burger_id": "b-classic", "quantity": 3}])
        assert quote.subtotal == 450.0
        assert quote.delivery_fee == 40.0
        assert quote.total_amount == 490.0

    def test_mixed_cart(self):
        quote = _quote(
            [
                {"burger_id": "b-classic", "quantity": 1},
                {"ingredient_ids": ["i-cheese"], "quantity": 1, "name": "Cheesy"},
            ]
        )
        assert [line.title for line in quote.lines] == ["Classic Veg", "Cheesy"]
        assert quote.subtotal == 220.0
        assert quote.total_amount == 260.0

    def test_empty_cart_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _quote([])
        assert exc.value.messages == {"items": ["Cart is empty"]}

    def test_unknown_burger_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _quote([{"burger_id": "b-ghost"}])
        assert exc.value.messages == {"burger_id": ["Unknown burger: b-ghost"]}

    def test_inactive_burger_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _quote([{"burger_id": "b-retired"}])
        assert exc.value.messages == {"burger_id": ["Old Timer is not available"]}

    def test_line_to_dict(self):
        line = _quote([{"burger_id": "b-classic", "quantity": 2}]).lines[0]
        assert line.to_dict() == {
            "kind": "burger",
            "title": "Classic Veg",
            "quantity": 2,
            "unit_price": 150.0,
            "line_total": 300.0,
            "burger_id": "b-classic",
            "ingredient_ids": [],
            "ingredients_price": 0.0,
        }


class TestPaisePrecision:
    def test_fractional_prices_reaching_threshold_get_free_delivery(self):
        burgers = {
            f"b-{n}": BurgerSnapshot(id=f"b-{n}", name=f"Burger {n}", price=price)
            for n, price in enumerate([116.2, 169.2, 124.9, 89.7])
        }
        quote = price_cart([BurgerLine(burger_id=b) for b in burgers], burgers, {}, POLICY)

        assert quote.subtotal == 500.0
        assert quote.delivery_fee == 0.0
        assert quote.total_amount == 500.0
        assert quote.notes == []

    def test_custom_line_totals_are_exact(self):
        ingredients = {
            "i-a": IngredientSnapshot(id="i-a", name="A", price=10.1),
            "i-b": IngredientSnapshot(id="i-b", name="B", price=20.2),
        }
        policy = PricingPolicy(custom_burger_base_price=0.0)
        quote = price_cart([CustomLine(ingredient_ids=("i-a", "i-b"), quantity=3)], {}, ingredients, policy)

        assert quote.lines[0].unit_price == 30.3
        assert quote.subtotal == 90.9
        assert quote.total_amount == 130.9
        assert quote.notes == ["Add INR 409.1 more for free delivery"]

    def test_to_money_rounds_half_up_to_paise(self):
        assert str(to_money(2.675)) == "2.68"
        assert str(to_money(0.1 + 0.2)) == "0.30"


class TestParseCart:
    def test_kind_is_inferred_from_shape(self):
        lines = parse_cart([{"burger_id": "b-classic"}, {"ingredient_ids": ["i-bun"]}])
        assert lines == [
            BurgerLine(burger_id="b-classic", quantity=1),
            CustomLine(ingredient_ids=("i-bun",), quantity=1),
        ]

    def test_both_shapes_rejected(self):
        with pytest.raises(ValidationError):
            parse_cart([{"burger_id": "b-classic", "ingredient_ids": ["i-bun"]}])

    def test_neither_shape_rejected(self):
        with pytest.raises(ValidationError):
            parse_cart([{"quantity": 1}])

    @pytest.mark.parametrize("quantity", [0, -2, 1.5, "two", True])
    def test_bad_quantity_rejected(self, quantity):
        with pytest.raises(ValidationError):
            parse_cart([{"burger_id": "b-classic", "quantity": quantity}])

    def test_referenced_ids(self):
        lines = parse_cart([{"burger_id": "b-classic"}, {"ingredient_ids": ["i-bun", "i-cheese"]}])
        assert referenced_ids(lines) == ({"b-classic"}, {"i-bun", "i-cheese"})
