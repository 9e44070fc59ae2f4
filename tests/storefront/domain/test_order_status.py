import pytest

from storefront.ordering.status import (
    HAPPY_PATH,
    OrderStatus,
    StatusPolicy,
    is_terminal,
    parse_status,
)
from storefront.shared.errors import InvalidStatusError

SKIP_AHEAD = StatusPolicy(allow_skip_ahead=True)
STEP_BY_STEP = StatusPolicy(allow_skip_ahead=False)


def test_parse_status_accepts_wire_values():
    assert parse_status("out-for-delivery") is OrderStatus.OUT_FOR_DELIVERY
    assert parse_status(OrderStatus.PLACED) is OrderStatus.PLACED


def test_parse_status_rejects_unknown_values():
    with pytest.raises(InvalidStatusError):
        parse_status("shipped")


def test_terminal_states():
    assert is_terminal(OrderStatus.DELIVERED)
    assert is_terminal(OrderStatus.CANCELLED)
    assert not any(is_terminal(s) for s in HAPPY_PATH[:-1])


class TestSkipAhead:
    def test_any_forward_move_is_allowed(self):
        SKIP_AHEAD.check_transition(OrderStatus.PLACED, OrderStatus.DELIVERED)
        SKIP_AHEAD.check_transition(OrderStatus.PREPARING, OrderStatus.OUT_FOR_DELIVERY)

    def test_backward_move_is_rejected(self):
        with pytest.raises(InvalidStatusError) as exc:
            SKIP_AHEAD.check_transition(OrderStatus.PACKAGING, OrderStatus.PREPARING)
        assert exc.value.messages == {"status": ["Cannot transition from packaging to preparing"]}

    def test_cancel_from_any_open_state(self):
        for status in HAPPY_PATH[:-1]:
            assert OrderStatus.CANCELLED in SKIP_AHEAD.allowed_targets(status)


class TestStepByStep:
    def test_only_next_state_or_cancel(self):
        assert STEP_BY_STEP.allowed_targets(OrderStatus.PLACED) == {
            OrderStatus.PREPARING,
            OrderStatus.CANCELLED,
        }

    def test_jumping_ahead_is_rejected(self):
        with pytest.raises(InvalidStatusError):
            STEP_BY_STEP.check_transition(OrderStatus.PLACED, OrderStatus.DELIVERED)


@pytest.mark.parametrize("policy", [SKIP_AHEAD, STEP_BY_STEP])
@pytest.mark.parametrize("terminal", [OrderStatus.DELIVERED, OrderStatus.CANCELLED])
def test_terminal_states_do_not_move(policy, terminal):
    assert policy.allowed_targets(terminal) == frozenset()
    with pytest.raises(InvalidStatusError) as exc:
        policy.check_transition(terminal, OrderStatus.PREPARING)
    assert exc.value.messages == {
        "status": [f"Order is already {terminal.value} and cannot move to preparing"]
    }


class TestCustomerCancellation:
    def test_allowed_before_out_for_delivery(self):
        policy = StatusPolicy()
        assert policy.customer_may_cancel(OrderStatus.PLACED)
        assert policy.customer_may_cancel(OrderStatus.PACKAGING)
        assert not policy.customer_may_cancel(OrderStatus.OUT_FOR_DELIVERY)
        assert not policy.customer_may_cancel(OrderStatus.DELIVERED)

    def test_cutoff_is_configurable(self):
        policy = StatusPolicy(customer_cancel_cutoff=OrderStatus.PREPARING)
        assert policy.customer_may_cancel(OrderStatus.PLACED)
        assert not policy.customer_may_cancel(OrderStatus.PREPARING)
