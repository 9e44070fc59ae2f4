"""Application tests for the back-office rollups."""

from datetime import UTC, datetime, timedelta

from storefront.catalogue.ingredient.ingredient import IngredientCategory
from storefront.reports.dashboard import (
    dashboard_stats,
    ingredient_usage,
    inventory_by_category,
    list_orders,
    sales_by_day,
    top_burgers,
)


def test_dashboard_counts_customers_and_revenue(
    burgers, customer_id, admin_id, place_order, set_status
):
    kept = place_order(customer_id, [{"burger_id": burgers["chicken"], "quantity": 2}])
    dropped = place_order(customer_id, [{"burger_id": burgers["classic"]}])
    set_status(dropped, "cancelled")

    stats = dashboard_stats()
    assert stats["total_orders"] == 2
    assert stats["total_revenue"] == 500.0
    assert stats["total_users"] == 1
    assert [o["order_id"] for o in stats["recent_orders"]] == [dropped, kept]
    assert stats["recent_orders"][0]["customer_name"] == "Asha Rao"
    assert stats["low_stock_count"] == 2
    assert [i["name"] for i in stats["low_stock_ingredients"]] == ["Patty", "Lettuce"]


def test_top_burgers_ranks_by_quantity(burgers, ingredients, customer_id, place_order):
    place_order(customer_id, [{"burger_id": burgers["classic"], "quantity": 3}])
    place_order(
        customer_id,
        [
            {"burger_id": burgers["paneer"], "quantity": 1},
            {"burger_id": burgers["classic"], "quantity": 1},
            {"ingredient_ids": [ingredients["cheese"]], "quantity": 5},
        ],
    )

    ranked = top_burgers()
    assert [(b["name"], b["total_sold"]) for b in ranked] == [("Classic Veg", 4), ("Paneer Tikka", 1)]
    assert ranked[0]["revenue"] == 600.0


def test_sales_by_day_excludes_cancelled_orders(burgers, customer_id, place_order, set_status):
    place_order(customer_id, [{"burger_id": burgers["classic"]}])
    place_order(customer_id, [{"burger_id": burgers["paneer"]}])
    cancelled = place_order(customer_id, [{"burger_id": burgers["chicken"]}])
    set_status(cancelled, "cancelled")

    (today,) = sales_by_day(days=7)
    assert today["date"] == datetime.now(UTC).date().isoformat()
    assert today["order_count"] == 2
    assert today["total_sales"] == 190.0 + 240.0


def test_sales_window_excludes_older_orders(burgers, customer_id, place_order):
    place_order(customer_id, [{"burger_id": burgers["classic"]}])
    assert sales_by_day(days=1, now=datetime.now(UTC) + timedelta(days=3)) == []


def test_ingredient_usage_counts_custom_burgers(ingredients, customer_id, place_order):
    place_order(customer_id, [{"ingredient_ids": [ingredients["bun"], ingredients["cheese"]], "quantity": 2}])
    place_order(customer_id, [{"ingredient_ids": [ingredients["cheese"]], "quantity": 1}])

    usage = ingredient_usage()
    assert [(u["name"], u["usage"]) for u in usage] == [("Cheese", 3), ("Bun", 2)]


def test_inventory_lists_every_ingredient(ingredients):
    inventory = inventory_by_category()
    assert set(inventory) == set(IngredientCategory)
    assert [i["name"] for i in inventory[IngredientCategory.PROTEIN]] == ["Patty"]
    assert inventory[IngredientCategory.PROTEIN][0]["is_low_stock"] is True


def test_list_orders_filters_and_paginates(burgers, customer_id, place_order, set_status):
    ids = [place_order(customer_id, [{"burger_id": burgers["classic"]}]) for _ in range(3)]
    set_status(ids[0], "preparing")

    everything = list_orders(per_page=2)
    assert everything["total"] == 3
    assert everything["pages"] == 2
    assert [o["order_id"] for o in everything["orders"]] == [ids[2], ids[1]]

    preparing = list_orders(status="preparing")
    assert [o["order_id"] for o in preparing["orders"]] == [ids[0]]
