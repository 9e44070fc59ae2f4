"""SubmitReview — review a burger from a delivered order.

Cross-aggregate rules are checked here before the Review is created:
the burger must exist, the customer must have a delivered order containing
it, and the customer must not have reviewed it before. The uniqueness check
is check-then-write inside the handler's unit of work.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.catalogue.burger.burger import Burger
from storefront.domain import storefront
from storefront.identity.user.user import User
from storefront.ordering.order.order import Order
from storefront.reviews.review.review import Review
from storefront.shared.errors import ConflictError, ForbiddenError

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Review")
class SubmitReview:
    customer_id = Identifier(required=True)
    burger_id = Identifier(required=True)
    rating = Integer(required=True)
    comment = String(required=True, max_length=500)


@storefront.command_handler(part_of=Review)
class SubmitReviewHandler:
    @handle(SubmitReview)
    def submit_review(self, command):
        burger = current_domain.repository_for(Burger).get(command.burger_id)

        order = current_domain.repository_for(Order).delivered_order_with_burger(
            command.customer_id, command.burger_id
        )
        if order is None:
            raise ForbiddenError({"review": ["You can only review burgers you have ordered and received"]})

        repo = current_domain.repository_for(Review)
        if repo.find_for(command.customer_id, command.burger_id) is not None:
            raise ConflictError({"review": ["You have already reviewed this burger"]})

        try:
            customer_name = current_domain.repository_for(User).get(command.customer_id).name
        except ObjectNotFoundError:
            customer_name = None

        review = Review.submit(
            customer_id=command.customer_id,
            burger_id=burger.id,
            rating=command.rating,
            comment=command.comment,
            customer_name=customer_name,
            order_id=order.id,
        )
        repo.add(review)
        logger.info(
            "review_submitted",
            review_id=str(review.id),
            burger_id=str(review.burger_id),
            rating=review.rating,
        )
        return str(review.id)
