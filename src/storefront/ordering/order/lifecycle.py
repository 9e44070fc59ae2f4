"""Order lifecycle commands — admin status updates and customer cancellation."""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.ordering.order.order import Order
from storefront.settings import status_policy

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, max_length=30)
    actor_id = Identifier()
    actor_role = String(required=True, max_length=20)
    reason = String(max_length=500)


@storefront.command(part_of="Order")
class CancelOrder:
    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    reason = String(max_length=500)


@storefront.command_handler(part_of=Order)
class OrderLifecycleHandler:
    @handle(UpdateOrderStatus)
    def update_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)

        previous = order.status
        changed = order.update_status(
            command.status,
            actor_role=command.actor_role,
            policy=status_policy(),
            reason=command.reason,
        )
        if changed:
            repo.add(order)
            logger.info(
                "order_status_changed",
                order_id=str(order.id),
                previous_status=previous,
                new_status=order.status,
                actor_id=str(command.actor_id) if command.actor_id else None,
            )
        return order.status

    @handle(CancelOrder)
    def cancel_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.cancel(command.customer_id, command.reason or "Cancelled by customer", status_policy())
        repo.add(order)
        logger.info("order_cancelled", order_id=str(order.id), cancelled_by=order.cancelled_by)
        return order.status
