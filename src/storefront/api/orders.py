"""FastAPI routes for customers placing, tracking and cancelling orders."""

import json

from fastapi import APIRouter, BackgroundTasks, Depends
from protean.utils.globals import current_domain

from storefront.api.deps import get_notifier, require_user
from storefront.api.schemas import (
    CancelOrderRequest,
    OrderPlacedResponse,
    OrderStatusResponse,
    PlaceOrderRequest,
)
from storefront.identity.port import Caller
from storefront.notifications.kind import NotificationKind
from storefront.notifications.notifier import Notifier
from storefront.ordering.order.lifecycle import CancelOrder
from storefront.ordering.order.placement import PlaceOrder
from storefront.ordering.queries import order_for_customer, order_status, orders_for_customer

order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=OrderPlacedResponse)
async def place_order(
    body: PlaceOrderRequest,
    background_tasks: BackgroundTasks,
    caller: Caller = Depends(require_user),
    notifier: Notifier = Depends(get_notifier),
) -> OrderPlacedResponse:
    command = PlaceOrder(
        customer_id=caller.user_id,
        items=json.dumps([item.model_dump(exclude_none=True) for item in body.items]),
        street=body.delivery_address.street,
        city=body.delivery_address.city,
        state=body.delivery_address.state,
        pincode=body.delivery_address.pincode,
        phone=body.phone,
        payment_method=body.payment_method,
    )
    order_id = current_domain.process(command, asynchronous=False)
    order = order_for_customer(order_id, caller.user_id)

    background_tasks.add_task(
        notifier.notify,
        NotificationKind.ORDER_CONFIRMATION,
        caller.email,
        {**order, "name": caller.name},
    )
    return OrderPlacedResponse(
        order_id=order["order_id"],
        order_number=order["order_number"],
        total_amount=order["total_amount"],
    )


@order_router.get("")
async def my_orders(caller: Caller = Depends(require_user)) -> list[dict]:
    return orders_for_customer(caller.user_id)


@order_router.get("/{order_id}")
async def get_order(order_id: str, caller: Caller = Depends(require_user)) -> dict:
    return order_for_customer(order_id, caller.user_id)


@order_router.get("/{order_id}/status")
async def poll_order_status(order_id: str, caller: Caller = Depends(require_user)) -> dict:
    """Lightweight status payload for client-side polling."""
    return order_status(order_id, caller.user_id)


@order_router.post("/{order_id}/cancel", response_model=OrderStatusResponse)
async def cancel_order(
    order_id: str,
    body: CancelOrderRequest | None = None,
    caller: Caller = Depends(require_user),
) -> OrderStatusResponse:
    command = CancelOrder(
        order_id=order_id,
        customer_id=caller.user_id,
        reason=body.reason if body else None,
    )
    status = current_domain.process(command, asynchronous=False)
    return OrderStatusResponse(order_id=order_id, status=status)
