"""Review aggregate — one customer's rating and comment for one burger.

At most one review exists per (customer, burger). The uniqueness and the
delivered-order requirement span aggregates and are enforced by the
SubmitReview handler; the aggregate itself guards rating range and comment
length.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Identifier, Integer, String

from storefront.domain import storefront
from storefront.reviews.review.events import ReviewSubmitted

COMMENT_MIN_LENGTH = 10
COMMENT_MAX_LENGTH = 500


@storefront.aggregate
class Review:
    customer_id = Identifier(required=True)
    customer_name = String(max_length=50)
    burger_id = Identifier(required=True)
    order_id = Identifier()
    rating = Integer(required=True)
    comment = String(required=True, max_length=COMMENT_MAX_LENGTH)
    is_approved = Boolean(default=True)
    created_at = DateTime()

    @invariant.post
    def rating_must_be_between_one_and_five(self):
        if self.rating is not None and not 1 <= self.rating <= 5:
            raise ValidationError({"rating": ["Rating must be between 1 and 5"]})

    @invariant.post
    def comment_must_have_minimum_length(self):
        if self.comment is not None and len(self.comment.strip()) < COMMENT_MIN_LENGTH:
            raise ValidationError({"comment": [f"Review must be at least {COMMENT_MIN_LENGTH} characters"]})

    @classmethod
    def submit(cls, customer_id, burger_id, rating, comment, customer_name=None, order_id=None):
        now = datetime.now(UTC)
        review = cls(
            customer_id=customer_id,
            customer_name=customer_name,
            burger_id=burger_id,
            order_id=order_id,
            rating=rating,
            comment=comment.strip() if comment else comment,
            created_at=now,
        )
        review.raise_(
            ReviewSubmitted(
                review_id=review.id,
                burger_id=review.burger_id,
                customer_id=review.customer_id,
                rating=review.rating,
                submitted_at=now,
            )
        )
        return review
