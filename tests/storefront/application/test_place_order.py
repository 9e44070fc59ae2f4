"""Application tests for order placement via domain.process()."""

import json

import pytest
from protean import current_domain
from protean.exceptions import ValidationError

from storefront.catalogue.burger.management import ChangeBurgerPrice, DeactivateBurger
from storefront.ordering.order.order import Order
from storefront.ordering.order.placement import PlaceOrder
from storefront.pricing.service import quote_cart, quote_custom_burger


class TestQuoting:
    def test_quote_cart_against_catalog(self, burgers):
        quote = quote_cart([{"burger_id": burgers["classic"], "quantity": 2}])
        assert quote.subtotal == 300.0
        assert quote.delivery_fee == 40.0
        assert quote.total_amount == 340.0

    def test_custom_burger_preview(self, ingredients):
        quote = quote_custom_burger([ingredients["bun"], ingredients["cheese"], ingredients["lettuce"]])
        assert quote.total_price == 80.0
        assert [i.name for i in quote.ingredients] == ["Bun", "Cheese", "Lettuce"]


class TestPlaceOrder:
    def test_happy_path(self, burgers, customer_id, place_order):
        order_id = place_order(customer_id, [{"burger_id": burgers["chicken"], "quantity": 2}])

        order = current_domain.repository_for(Order).get(order_id)
        assert order.status == "placed"
        assert order.order_number.startswith("BRG")
        assert order.order_number.endswith("1")
        assert order.pricing.subtotal == 500.0
        assert order.pricing.delivery_fee == 0.0
        assert order.pricing.total_amount == 500.0
        assert order.delivery_address.pincode == "560001"
        assert order.items[0].name == "Chicken Zinger"

    def test_custom_burger_order(self, ingredients, customer_id, place_order):
        order_id = place_order(
            customer_id,
            [{"ingredient_ids": [ingredients["bun"], ingredients["cheese"], ingredients["lettuce"]], "quantity": 2}],
        )

        order = current_domain.repository_for(Order).get(order_id)
        (item,) = order.items
        assert item.is_custom
        assert item.ingredients_price == 30.0
        assert item.line_total == 160.0
        assert order.pricing.total_amount == 200.0

    def test_order_numbers_are_sequential(self, burgers, customer_id, place_order):
        first = place_order(customer_id, [{"burger_id": burgers["classic"]}])
        second = place_order(customer_id, [{"burger_id": burgers["classic"]}])

        repo = current_domain.repository_for(Order)
        assert repo.get(first).order_number.endswith("1")
        assert repo.get(second).order_number.endswith("2")
        assert repo.get(first).order_number != repo.get(second).order_number

    def test_prices_are_locked_at_placement(self, burgers, customer_id, place_order):
        order_id = place_order(customer_id, [{"burger_id": burgers["classic"]}])
        current_domain.process(ChangeBurgerPrice(burger_id=burgers["classic"], price=999.0), asynchronous=False)

        order = current_domain.repository_for(Order).get(order_id)
        assert order.items[0].unit_price == 150.0
        assert order.pricing.subtotal == 150.0

    def test_inactive_burger_cannot_be_ordered(self, burgers, customer_id, place_order):
        current_domain.process(DeactivateBurger(burger_id=burgers["vegan"]), asynchronous=False)
        with pytest.raises(ValidationError):
            place_order(customer_id, [{"burger_id": burgers["vegan"]}])

    def test_empty_cart_rejected(self, customer_id, place_order):
        with pytest.raises(ValidationError) as exc:
            place_order(customer_id, [])
        assert exc.value.messages == {"items": ["Cart is empty"]}

    def test_invalid_phone_rejected(self, burgers, customer_id, place_order):
        with pytest.raises(ValidationError):
            place_order(customer_id, [{"burger_id": burgers["classic"]}], phone="12345")

    def test_items_must_be_a_json_array(self, customer_id):
        command = PlaceOrder(
            customer_id=customer_id,
            items=json.dumps({"burger_id": "x"}),
            street="12 MG Road",
            city="Bengaluru",
            state="Karnataka",
            pincode="560001",
            phone="9876543210",
        )
        with pytest.raises(ValidationError):
            current_domain.process(command, asynchronous=False)

    def test_nothing_is_persisted_on_failure(self, burgers, customer_id, place_order):
        with pytest.raises(ValidationError):
            place_order(customer_id, [{"burger_id": burgers["classic"]}, {"burger_id": "missing"}])
        assert current_domain.repository_for(Order).count() == 0
