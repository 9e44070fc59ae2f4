"""Admin aggregation views — read-only rollups recomputed on every call.

Every function reads straight from the repositories; nothing is cached or
materialised, so the numbers always reflect the current store.
"""

import math
from collections import defaultdict
from datetime import UTC, datetime, timedelta

from protean.utils.globals import current_domain

from storefront.catalogue.burger.burger import Burger
from storefront.catalogue.ingredient.ingredient import Ingredient, IngredientCategory
from storefront.identity.user.user import User
from storefront.menu.queries import ingredient_view
from storefront.ordering.order.order import Order
from storefront.ordering.queries import order_view
from storefront.ordering.status import OrderStatus, parse_status
from storefront.pricing.engine import ItemKind, to_money
from storefront.settings import sales_window_days

RECENT_ORDERS_LIMIT = 10
TOP_BURGERS_LIMIT = 5
TOP_INGREDIENTS_LIMIT = 10
ORDERS_PER_PAGE = 20


def _orders() -> list[Order]:
    return current_domain.repository_for(Order).everything()


def _is_revenue(order: Order) -> bool:
    return order.status != OrderStatus.CANCELLED.value


def _customer_names(orders) -> dict[str, str]:
    ids = {str(o.customer_id) for o in orders}
    return {user_id: u.name for user_id, u in current_domain.repository_for(User).find_many(ids).items()}


def _as_utc(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=UTC)


def _newest_first(orders):
    return sorted(orders, key=lambda o: o.created_at, reverse=True)


def low_stock_ingredients() -> list[dict]:
    low = [i for i in current_domain.repository_for(Ingredient).everything() if i.is_low_stock]
    return [ingredient_view(i) for i in sorted(low, key=lambda i: (i.stock, i.name.lower()))]


def recent_orders(limit: int = RECENT_ORDERS_LIMIT) -> list[dict]:
    orders = current_domain.repository_for(Order).newest(limit)
    names = _customer_names(orders)
    return [{**order_view(o), "customer_name": names.get(str(o.customer_id))} for o in orders]


def dashboard_stats() -> dict:
    orders = current_domain.repository_for(Order)
    low_stock = low_stock_ingredients()
    revenue = sum((to_money(o.pricing.total_amount) for o in orders.everything() if _is_revenue(o)), to_money(0))
    return {
        "total_orders": orders.count(),
        "total_revenue": float(revenue),
        "total_users": current_domain.repository_for(User).count_customers(),
        "low_stock_count": len(low_stock),
        "recent_orders": recent_orders(),
        "low_stock_ingredients": low_stock,
    }


def top_burgers(limit: int = TOP_BURGERS_LIMIT) -> list[dict]:
    """Menu burgers ranked by quantity sold across all orders; custom items are excluded."""
    sold: dict[str, dict] = {}
    for order in _orders():
        for item in order.items:
            if item.kind != ItemKind.BURGER.value:
                continue
            entry = sold.setdefault(
                str(item.burger_id),
                {"burger_id": str(item.burger_id), "name": item.name, "total_sold": 0, "revenue": 0.0},
            )
            entry["total_sold"] += item.quantity
            entry["revenue"] = float(to_money(entry["revenue"]) + to_money(item.line_total))

    current = current_domain.repository_for(Burger).find_many(sold.keys())
    for burger_id, entry in sold.items():
        if burger_id in current:
            entry["name"] = current[burger_id].name

    ranked = sorted(sold.values(), key=lambda e: (-e["total_sold"], -e["revenue"], e["name"]))
    return ranked[:limit]


def sales_by_day(days: int | None = None, now: datetime | None = None) -> list[dict]:
    """Daily totals of non-cancelled orders within the window, most recent day first."""
    days = days or sales_window_days()
    now = now or datetime.now(UTC)
    since = now - timedelta(days=days)

    buckets: dict[str, dict] = defaultdict(lambda: {"total_sales": 0.0, "order_count": 0})
    for order in _orders():
        placed_at = _as_utc(order.created_at)
        if not _is_revenue(order) or placed_at < since:
            continue
        bucket = buckets[placed_at.date().isoformat()]
        bucket["total_sales"] = float(to_money(bucket["total_sales"]) + to_money(order.pricing.total_amount))
        bucket["order_count"] += 1

    return [{"date": day, **buckets[day]} for day in sorted(buckets, reverse=True)]


def ingredient_usage(limit: int = TOP_INGREDIENTS_LIMIT) -> list[dict]:
    """Ingredients ranked by how many custom burgers included them (item quantity per occurrence)."""
    usage: dict[str, int] = defaultdict(int)
    for order in _orders():
        for item in order.items:
            if item.kind != ItemKind.CUSTOM.value:
                continue
            for ingredient_id in item.ingredient_id_list:
                usage[ingredient_id] += item.quantity

    ingredients = current_domain.repository_for(Ingredient).find_many(usage.keys())
    ranked = [
        {
            "ingredient_id": ingredient_id,
            "name": ingredients[ingredient_id].name if ingredient_id in ingredients else None,
            "usage": count,
        }
        for ingredient_id, count in usage.items()
    ]
    ranked.sort(key=lambda e: (-e["usage"], e["name"] or ""))
    return ranked[:limit]


def inventory_by_category() -> dict[IngredientCategory, list[dict]]:
    """Every ingredient grouped by category, names sorted within each group."""
    grouped: dict[IngredientCategory, list[dict]] = {category: [] for category in IngredientCategory}
    everything = current_domain.repository_for(Ingredient).everything()
    for ingredient in sorted(everything, key=lambda i: i.name.lower()):
        grouped[IngredientCategory(ingredient.category)].append(ingredient_view(ingredient))
    return grouped


def list_orders(page: int = 1, status=None, per_page: int = ORDERS_PER_PAGE) -> dict:
    """Paginated order listing for the back office, newest first."""
    page = max(int(page or 1), 1)
    orders = _orders()
    if status:
        wanted = parse_status(status).value
        orders = [o for o in orders if o.status == wanted]

    orders = _newest_first(orders)
    start = (page - 1) * per_page
    window = orders[start : start + per_page]
    names = _customer_names(window)

    return {
        "orders": [{**order_view(o), "customer_name": names.get(str(o.customer_id))} for o in window],
        "total": len(orders),
        "page": page,
        "pages": math.ceil(len(orders) / per_page) if orders else 0,
    }
