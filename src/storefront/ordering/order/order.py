"""Order aggregate (CQRS) — the persisted record of a placed order.

Pricing fields are a snapshot taken from the pricing engine at placement and
never change afterwards. ``status`` is the only lifecycle field that moves;
every move is appended to ``status_history`` and announced with an event.

State Machine (see storefront.ordering.status):
    placed → preparing → packaging → out-for-delivery → delivered
    cancelled from any non-terminal state
"""

import json
from datetime import UTC, datetime, timedelta
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import (
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    Text,
    ValueObject,
)

from storefront.domain import storefront
from storefront.identity.user.user import UserRole
from storefront.ordering.order.events import OrderCancelled, OrderPlaced, OrderStatusChanged
from storefront.ordering.status import (
    OrderStatus,
    StatusPolicy,
    is_terminal,
    parse_status,
)
from storefront.pricing.engine import CartQuote, ItemKind, PricedLine, to_money
from storefront.shared.errors import ForbiddenError, InvalidStatusError
from storefront.shared.phone import validate_mobile


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class PaymentMethod(Enum):
    COD = "cod"
    ONLINE = "online"


class PaymentStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"


class Actor(Enum):
    CUSTOMER = "customer"
    ADMIN = "admin"


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@storefront.value_object(part_of="Order")
class DeliveryAddress:
    """Where the order goes, captured at checkout and never updated."""

    street = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    state = String(required=True, max_length=100)
    pincode = String(required=True, max_length=6)

    @invariant.post
    def pincode_must_be_six_digits(self):
        if self.pincode is not None and not (len(self.pincode) == 6 and self.pincode.isdigit()):
            raise ValidationError({"pincode": ["Pincode must be 6 digits"]})


@storefront.value_object(part_of="Order")
class OrderPricing:
    """Totals locked at placement."""

    subtotal = Float(default=0.0)
    delivery_fee = Float(default=0.0)
    total_amount = Float(default=0.0)
    currency = String(max_length=3, default="INR")


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@storefront.entity(part_of="Order")
class OrderItem:
    """One line of an order: a menu burger or a custom-built burger.

    ``kind`` decides the shape. A burger item references a menu burger and
    carries no ingredients; a custom item carries its ingredient ids and no
    burger reference. Use ``for_burger`` / ``for_custom`` to build one.
    """

    kind = String(choices=ItemKind, required=True)
    name = String(required=True, max_length=100)
    burger_id = Identifier()
    ingredient_ids = Text()  # JSON array, custom items only
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)
    ingredients_price = Float(default=0.0)
    line_total = Float(required=True, min_value=0.0)

    @invariant.post
    def shape_must_match_kind(self):
        ingredients = json.loads(self.ingredient_ids) if self.ingredient_ids else []
        if self.kind == ItemKind.BURGER.value:
            if not self.burger_id or ingredients:
                raise ValidationError({"items": ["A burger item needs a burger and no ingredients"]})
        elif self.kind == ItemKind.CUSTOM.value:
            if self.burger_id or not ingredients:
                raise ValidationError({"items": ["A custom item needs ingredients and no burger"]})

    @classmethod
    def for_burger(cls, burger_id, name, quantity, unit_price):
        return cls(
            kind=ItemKind.BURGER.value,
            name=name,
            burger_id=burger_id,
            quantity=quantity,
            unit_price=unit_price,
            line_total=float(to_money(to_money(unit_price) * quantity)),
        )

    @classmethod
    def for_custom(cls, name, ingredient_ids, quantity, unit_price, ingredients_price=0.0):
        return cls(
            kind=ItemKind.CUSTOM.value,
            name=name,
            ingredient_ids=json.dumps([str(i) for i in ingredient_ids]),
            quantity=quantity,
            unit_price=unit_price,
            ingredients_price=ingredients_price,
            line_total=float(to_money(to_money(unit_price) * quantity)),
        )

    @classmethod
    def from_priced_line(cls, line: PricedLine):
        if line.kind is ItemKind.BURGER:
            return cls.for_burger(line.burger_id, line.title, line.quantity, line.unit_price)
        return cls.for_custom(
            line.title,
            line.ingredient_ids,
            line.quantity,
            line.unit_price,
            ingredients_price=line.ingredients_price,
        )

    @property
    def is_custom(self) -> bool:
        return self.kind == ItemKind.CUSTOM.value

    @property
    def ingredient_id_list(self) -> list[str]:
        return json.loads(self.ingredient_ids) if self.ingredient_ids else []


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@storefront.aggregate
class Order:
    order_number = String(required=True, max_length=40, unique=True)
    customer_id = Identifier(required=True)
    items = HasMany(OrderItem)
    pricing = ValueObject(OrderPricing)
    delivery_address = ValueObject(DeliveryAddress)
    phone = String(required=True, max_length=10)
    payment_method = String(choices=PaymentMethod, default=PaymentMethod.COD.value)
    payment_status = String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    status = String(choices=OrderStatus, default=OrderStatus.PLACED.value)
    status_history = Text()  # JSON array of {status, at, by}
    estimated_delivery = DateTime()
    cancellation_reason = String(max_length=500)
    cancelled_by = String(max_length=20)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        customer_id,
        order_number,
        quote: CartQuote,
        delivery_address: dict,
        phone,
        payment_method=PaymentMethod.COD.value,
        eta_minutes=45,
    ):
        """Create an order from a priced cart.

        Args:
            customer_id: The customer placing the order.
            order_number: Human readable number, e.g. ``BRG17180000000001``.
            quote: CartQuote produced by the pricing engine.
            delivery_address: Dict with street, city, state, pincode.
            phone: 10-digit mobile number.
            payment_method: "cod" or "online".
            eta_minutes: Minutes from now until the estimated delivery.
        """
        if not quote.lines:
            raise ValidationError({"items": ["Cart is empty"]})

        now = datetime.now(UTC)
        order = cls(
            order_number=order_number,
            customer_id=customer_id,
            items=[OrderItem.from_priced_line(line) for line in quote.lines],
            pricing=OrderPricing(
                subtotal=quote.subtotal,
                delivery_fee=quote.delivery_fee,
                total_amount=quote.total_amount,
                currency=quote.currency,
            ),
            delivery_address=DeliveryAddress(**delivery_address),
            phone=validate_mobile(phone),
            payment_method=payment_method or PaymentMethod.COD.value,
            status=OrderStatus.PLACED.value,
            status_history=json.dumps([_history_entry(OrderStatus.PLACED, Actor.CUSTOMER, now)]),
            estimated_delivery=now + timedelta(minutes=eta_minutes),
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=order.id,
                order_number=order.order_number,
                customer_id=order.customer_id,
                item_count=sum(item.quantity for item in order.items),
                subtotal=order.pricing.subtotal,
                delivery_fee=order.pricing.delivery_fee,
                total_amount=order.pricing.total_amount,
                currency=order.pricing.currency,
                payment_method=order.payment_method,
                estimated_delivery=order.estimated_delivery,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------
    @property
    def history(self) -> list[dict]:
        return json.loads(self.status_history) if self.status_history else []

    @property
    def is_terminal(self) -> bool:
        return is_terminal(OrderStatus(self.status))

    def is_owned_by(self, customer_id) -> bool:
        return customer_id is not None and str(self.customer_id) == str(customer_id)

    def _move_to(self, target: OrderStatus, actor: Actor, now: datetime):
        self.status = target.value
        self.status_history = json.dumps([*self.history, _history_entry(target, actor, now)])
        self.updated_at = now

    def _cancel(self, reason, actor: Actor):
        previous = OrderStatus(self.status)
        now = datetime.now(UTC)
        self.cancellation_reason = reason
        self.cancelled_by = actor.value
        self._move_to(OrderStatus.CANCELLED, actor, now)

        self.raise_(
            OrderCancelled(
                order_id=self.id,
                order_number=self.order_number,
                customer_id=self.customer_id,
                previous_status=previous.value,
                reason=reason,
                cancelled_by=actor.value,
                cancelled_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Lifecycle transitions
    # -------------------------------------------------------------------
    def update_status(self, target, actor_role, policy: StatusPolicy, reason=None) -> bool:
        """Move the order to ``target`` on behalf of an administrator.

        Returns False when the order already sits in ``target`` (no-op),
        True when a transition happened.
        """
        if actor_role != UserRole.ADMIN.value:
            raise ForbiddenError({"status": ["Only an administrator can update order status"]})

        target = parse_status(target)
        current = OrderStatus(self.status)
        if target == current:
            return False

        policy.check_transition(current, target)

        if target == OrderStatus.CANCELLED:
            self._cancel(reason or "Cancelled by store", Actor.ADMIN)
            return True

        now = datetime.now(UTC)
        self._move_to(target, Actor.ADMIN, now)
        self.raise_(
            OrderStatusChanged(
                order_id=self.id,
                order_number=self.order_number,
                customer_id=self.customer_id,
                previous_status=current.value,
                new_status=target.value,
                changed_by=Actor.ADMIN.value,
                changed_at=now,
            )
        )
        return True

    def cancel(self, customer_id, reason, policy: StatusPolicy):
        """Cancel on behalf of the owning customer."""
        if not self.is_owned_by(customer_id):
            raise ForbiddenError({"order": ["You can only cancel your own orders"]})

        current = OrderStatus(self.status)
        if is_terminal(current):
            raise InvalidStatusError({"status": [f"Order is already {current.value} and cannot be cancelled"]})
        if not policy.customer_may_cancel(current):
            raise ForbiddenError({"status": [f"Order is {current.value} and can no longer be cancelled"]})

        self._cancel(reason, Actor.CUSTOMER)


def _history_entry(status: OrderStatus, actor: Actor, at: datetime) -> dict:
    return {"status": status.value, "at": at.isoformat(), "by": actor.value}
