"""PlaceOrder — price a cart against the live catalog and persist the order."""

import json

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.ordering.order.order import Order, PaymentMethod
from storefront.pricing.service import quote_cart
from storefront.settings import delivery_eta_minutes

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class PlaceOrder:
    customer_id = Identifier(required=True)
    items = Text(required=True)  # JSON array of cart lines
    street = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    state = String(required=True, max_length=100)
    pincode = String(required=True, max_length=6)
    phone = String(required=True, max_length=15)
    payment_method = String(choices=PaymentMethod, default=PaymentMethod.COD.value)


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        try:
            items = json.loads(command.items)
        except (json.JSONDecodeError, TypeError):
            raise ValidationError({"items": ["Items must be a JSON array"]}) from None
        if not isinstance(items, list):
            raise ValidationError({"items": ["Items must be a JSON array"]})

        quote = quote_cart(items)

        repo = current_domain.repository_for(Order)
        order = Order.place(
            customer_id=command.customer_id,
            order_number=repo.next_order_number(),
            quote=quote,
            delivery_address={
                "street": command.street,
                "city": command.city,
                "state": command.state,
                "pincode": command.pincode,
            },
            phone=command.phone,
            payment_method=command.payment_method,
            eta_minutes=delivery_eta_minutes(),
        )
        repo.add(order)

        logger.info(
            "order_placed",
            order_id=str(order.id),
            order_number=order.order_number,
            customer_id=str(order.customer_id),
            total_amount=order.pricing.total_amount,
        )
        return str(order.id)
