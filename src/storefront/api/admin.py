"""FastAPI routes for the back office: rollups, inventory, menu and order lifecycle.

Every route requires an administrator caller.
"""

import json

from fastapi import APIRouter, BackgroundTasks, Depends
from protean.utils.globals import current_domain

from storefront.api.deps import get_notifier, require_admin
from storefront.api.schemas import (
    AddBurgerRequest,
    AddIngredientRequest,
    ChangePriceRequest,
    IdResponse,
    OrderStatusResponse,
    RegisterAdminRequest,
    StatusResponse,
    StockResponse,
    UpdateOrderStatusRequest,
    UpdateStockRequest,
    UserIdResponse,
)
from storefront.catalogue.burger.management import (
    ActivateBurger,
    AddBurger,
    ChangeBurgerPrice,
    DeactivateBurger,
)
from storefront.catalogue.ingredient.management import AddIngredient, UpdateIngredientStock
from storefront.identity.port import Caller
from storefront.identity.user.registration import DeactivateUser, RegisterUser
from storefront.notifications.kind import NotificationKind
from storefront.notifications.notifier import Notifier
from storefront.ordering.order.lifecycle import UpdateOrderStatus
from storefront.reports.dashboard import (
    dashboard_stats,
    ingredient_usage,
    inventory_by_category,
    list_orders,
    sales_by_day,
    top_burgers,
)
from storefront.shared.email import normalize_email

admin_router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


# ---------------------------------------------------------------------------
# Rollups
# ---------------------------------------------------------------------------
@admin_router.get("/dashboard")
async def get_dashboard() -> dict:
    return dashboard_stats()


@admin_router.get("/reports/top-burgers")
async def get_top_burgers(limit: int = 5) -> list[dict]:
    return top_burgers(limit)


@admin_router.get("/reports/sales")
async def get_sales_by_day(days: int | None = None) -> list[dict]:
    return sales_by_day(days)


@admin_router.get("/reports/ingredient-usage")
async def get_ingredient_usage(limit: int = 10) -> list[dict]:
    return ingredient_usage(limit)


# ---------------------------------------------------------------------------
# Inventory
# ---------------------------------------------------------------------------
@admin_router.get("/inventory")
async def get_inventory() -> dict:
    return {category.value: items for category, items in inventory_by_category().items()}


@admin_router.post("/ingredients", status_code=201, response_model=IdResponse)
async def add_ingredient(body: AddIngredientRequest) -> IdResponse:
    ingredient_id = current_domain.process(AddIngredient(**body.model_dump()), asynchronous=False)
    return IdResponse(id=ingredient_id)


@admin_router.put("/ingredients/{ingredient_id}/stock", response_model=StockResponse)
async def update_stock(ingredient_id: str, body: UpdateStockRequest) -> StockResponse:
    stock = current_domain.process(
        UpdateIngredientStock(ingredient_id=ingredient_id, stock=body.stock),
        asynchronous=False,
    )
    return StockResponse(ingredient_id=ingredient_id, stock=stock)


# ---------------------------------------------------------------------------
# Menu
# ---------------------------------------------------------------------------
@admin_router.post("/burgers", status_code=201, response_model=IdResponse)
async def add_burger(body: AddBurgerRequest) -> IdResponse:
    command = AddBurger(
        name=body.name,
        description=body.description,
        price=body.price,
        category=body.category,
        ingredient_ids=json.dumps(body.ingredient_ids),
        image=body.image,
        preparation_time=body.preparation_time,
    )
    burger_id = current_domain.process(command, asynchronous=False)
    return IdResponse(id=burger_id)


@admin_router.put("/burgers/{burger_id}/price", response_model=StatusResponse)
async def change_burger_price(burger_id: str, body: ChangePriceRequest) -> StatusResponse:
    current_domain.process(ChangeBurgerPrice(burger_id=burger_id, price=body.price), asynchronous=False)
    return StatusResponse()


@admin_router.put("/burgers/{burger_id}/activate", response_model=StatusResponse)
async def activate_burger(burger_id: str) -> StatusResponse:
    current_domain.process(ActivateBurger(burger_id=burger_id), asynchronous=False)
    return StatusResponse()


@admin_router.put("/burgers/{burger_id}/deactivate", response_model=StatusResponse)
async def deactivate_burger(burger_id: str) -> StatusResponse:
    current_domain.process(DeactivateBurger(burger_id=burger_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
@admin_router.get("/orders")
async def get_orders(page: int = 1, status: str | None = None) -> dict:
    return list_orders(page=page, status=status)


@admin_router.put("/orders/{order_id}/status", response_model=OrderStatusResponse)
async def update_order_status(
    order_id: str,
    body: UpdateOrderStatusRequest,
    caller: Caller = Depends(require_admin),
) -> OrderStatusResponse:
    command = UpdateOrderStatus(
        order_id=order_id,
        status=body.status,
        actor_id=caller.user_id,
        actor_role=caller.role,
        reason=body.reason,
    )
    status = current_domain.process(command, asynchronous=False)
    return OrderStatusResponse(order_id=order_id, status=status)


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------
@admin_router.post("/users", status_code=201, response_model=UserIdResponse)
async def register_staff(
    body: RegisterAdminRequest,
    background_tasks: BackgroundTasks,
    notifier: Notifier = Depends(get_notifier),
) -> UserIdResponse:
    user_id = current_domain.process(RegisterUser(**body.model_dump()), asynchronous=False)
    background_tasks.add_task(
        notifier.notify,
        NotificationKind.WELCOME,
        normalize_email(body.email),
        {"name": body.name},
    )
    return UserIdResponse(user_id=user_id)


@admin_router.put("/users/{user_id}/deactivate", response_model=StatusResponse)
async def deactivate_user(user_id: str) -> StatusResponse:
    current_domain.process(DeactivateUser(user_id=user_id), asynchronous=False)
    return StatusResponse()
