import pytest
from protean.exceptions import ValidationError

from storefront.catalogue.burger.burger import Burger
from storefront.catalogue.burger.events import (
    BurgerDeactivated,
    BurgerPriceChanged,
    BurgerRatingRecalculated,
)
from storefront.catalogue.burger.rating import rating_summary
from storefront.catalogue.ingredient.events import IngredientStockUpdated
from storefront.catalogue.ingredient.ingredient import Ingredient


class TestRatingSummary:
    def test_mean_and_count(self):
        assert rating_summary([4, 5, 3]) == (4.0, 3)

    def test_no_ratings(self):
        assert rating_summary([]) == (0.0, 0)

    def test_rounds_half_up(self):
        assert rating_summary([4, 4, 4, 5]) == (4.3, 4)

    def test_rounds_to_one_decimal(self):
        assert rating_summary([5, 4, 4]) == (4.3, 3)


class TestIngredient:
    def test_low_stock_threshold_is_inclusive(self):
        assert Ingredient.add(name="Cheese", price=20.0, category="cheese", stock=10).is_low_stock
        assert not Ingredient.add(name="Cheese", price=20.0, category="cheese", stock=11).is_low_stock

    def test_update_stock(self):
        ingredient = Ingredient.add(name="Onion", price=5.0, category="vegetable", stock=50)
        ingredient.update_stock(3)

        assert ingredient.stock == 3
        event = ingredient._events[-1]
        assert isinstance(event, IngredientStockUpdated)
        assert event.previous_stock == 50
        assert event.is_low_stock is True

    def test_negative_stock_rejected(self):
        ingredient = Ingredient.add(name="Onion", price=5.0, category="vegetable", stock=50)
        with pytest.raises(ValidationError) as exc:
            ingredient.update_stock(-1)
        assert exc.value.messages == {"stock": ["Stock cannot be negative"]}

    def test_unknown_category_rejected(self):
        with pytest.raises(ValidationError):
            Ingredient.add(name="Sprinkles", price=5.0, category="dessert")


class TestBurger:
    def _burger(self, **overrides):
        kwargs = dict(name=" Classic Veg ", price=150.0, category="veg", ingredient_ids=["i-1", "i-2", "i-1"])
        kwargs.update(overrides)
        return Burger.add(**kwargs)

    def test_add_normalises_name_and_ingredients(self):
        burger = self._burger()
        assert burger.name == "Classic Veg"
        assert burger.ingredient_id_list == ["i-1", "i-2"]
        assert burger.rating == 0.0
        assert burger.review_count == 0
        assert burger.is_active

    def test_change_price(self):
        burger = self._burger()
        burger.change_price(175.0)

        assert burger.price == 175.0
        event = burger._events[-1]
        assert isinstance(event, BurgerPriceChanged)
        assert event.previous_price == 150.0

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            self._burger().change_price(-1.0)

    def test_deactivate_is_idempotent(self):
        burger = self._burger()
        burger.deactivate()
        burger.deactivate()

        assert not burger.is_active
        assert len([e for e in burger._events if isinstance(e, BurgerDeactivated)]) == 1

    def test_record_rating(self):
        burger = self._burger()
        burger.record_rating(4.5, 2)

        assert (burger.rating, burger.review_count) == (4.5, 2)
        assert isinstance(burger._events[-1], BurgerRatingRecalculated)

    def test_unknown_category_rejected(self):
        with pytest.raises(ValidationError):
            self._burger(category="dessert")
