"""Order status state machine.

    placed → preparing → packaging → out-for-delivery → delivered
    any non-terminal state → cancelled
    delivered, cancelled: terminal

Forward jumps along the happy path (placed → delivered) are allowed unless the
``StatusPolicy`` turns skip-ahead off, in which case only the next happy-path
state or cancelled is accepted. Backward moves are never accepted.
"""

from dataclasses import dataclass
from enum import Enum

from storefront.shared.errors import InvalidStatusError


class OrderStatus(Enum):
    PLACED = "placed"
    PREPARING = "preparing"
    PACKAGING = "packaging"
    OUT_FOR_DELIVERY = "out-for-delivery"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


HAPPY_PATH = (
    OrderStatus.PLACED,
    OrderStatus.PREPARING,
    OrderStatus.PACKAGING,
    OrderStatus.OUT_FOR_DELIVERY,
    OrderStatus.DELIVERED,
)

TERMINAL_STATES = frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED})

_POSITION = {status: index for index, status in enumerate(HAPPY_PATH)}


def parse_status(value) -> OrderStatus:
    """Coerce a raw status value into an OrderStatus or raise InvalidStatusError."""
    if isinstance(value, OrderStatus):
        return value
    try:
        return OrderStatus(value)
    except ValueError:
        raise InvalidStatusError({"status": [f"Unknown order status: {value!r}"]}) from None


def is_terminal(status: OrderStatus) -> bool:
    return status in TERMINAL_STATES


@dataclass(frozen=True)
class StatusPolicy:
    """Tunable rules of the state machine, read from configuration."""

    allow_skip_ahead: bool = True
    customer_cancel_cutoff: OrderStatus = OrderStatus.OUT_FOR_DELIVERY

    def allowed_targets(self, current: OrderStatus) -> frozenset[OrderStatus]:
        if is_terminal(current):
            return frozenset()

        position = _POSITION[current]
        if self.allow_skip_ahead:
            forward = HAPPY_PATH[position + 1 :]
        else:
            forward = HAPPY_PATH[position + 1 : position + 2]
        return frozenset(forward) | {OrderStatus.CANCELLED}

    def check_transition(self, current: OrderStatus, target: OrderStatus) -> None:
        """Raise InvalidStatusError unless ``current → target`` is a legal move."""
        if is_terminal(current):
            raise InvalidStatusError(
                {"status": [f"Order is already {current.value} and cannot move to {target.value}"]}
            )
        if target not in self.allowed_targets(current):
            raise InvalidStatusError({"status": [f"Cannot transition from {current.value} to {target.value}"]})

    def customer_may_cancel(self, current: OrderStatus) -> bool:
        """Whether the owner can still cancel an order sitting in ``current``."""
        if is_terminal(current):
            return False
        return _POSITION[current] < _POSITION.get(self.customer_cancel_cutoff, len(HAPPY_PATH))
