"""Read side for customers: their orders, one order, and the status poll."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.ordering.order.order import Order


def item_view(item) -> dict:
    return {
        "kind": item.kind,
        "name": item.name,
        "burger_id": str(item.burger_id) if item.burger_id else None,
        "ingredient_ids": item.ingredient_id_list,
        "quantity": item.quantity,
        "unit_price": item.unit_price,
        "ingredients_price": item.ingredients_price,
        "line_total": item.line_total,
    }


def order_view(order: Order) -> dict:
    address = order.delivery_address
    return {
        "order_id": str(order.id),
        "order_number": order.order_number,
        "customer_id": str(order.customer_id),
        "items": [item_view(i) for i in order.items],
        "subtotal": order.pricing.subtotal,
        "delivery_fee": order.pricing.delivery_fee,
        "total_amount": order.pricing.total_amount,
        "currency": order.pricing.currency,
        "delivery_address": {
            "street": address.street,
            "city": address.city,
            "state": address.state,
            "pincode": address.pincode,
        },
        "phone": order.phone,
        "payment_method": order.payment_method,
        "payment_status": order.payment_status,
        "status": order.status,
        "status_history": order.history,
        "estimated_delivery": order.estimated_delivery,
        "cancellation_reason": order.cancellation_reason,
        "cancelled_by": order.cancelled_by,
        "created_at": order.created_at,
    }


def orders_for_customer(customer_id) -> list[dict]:
    return [order_view(o) for o in current_domain.repository_for(Order).for_customer(customer_id)]


def _owned_order(order_id, customer_id) -> Order:
    order = current_domain.repository_for(Order).get(order_id)
    # Someone else's order is reported as missing rather than forbidden
    if not order.is_owned_by(customer_id):
        raise ObjectNotFoundError({"_entity": f"Order {order_id} not found"})
    return order


def order_for_customer(order_id, customer_id) -> dict:
    return order_view(_owned_order(order_id, customer_id))


def order_status(order_id, customer_id) -> dict:
    """Polling payload; clients stop polling once ``is_terminal`` is true."""
    order = _owned_order(order_id, customer_id)
    return {
        "order_id": str(order.id),
        "status": order.status,
        "is_terminal": order.is_terminal,
        "estimated_delivery": order.estimated_delivery,
    }
