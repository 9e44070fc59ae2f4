"""Domain events for the Review aggregate."""

from protean.fields import DateTime, Identifier, Integer

from storefront.domain import storefront


@storefront.event(part_of="Review")
class ReviewSubmitted:
    """A customer reviewed a burger from one of their delivered orders.

    Consumed by the burger rating handler to recompute the average.
    """

    __version__ = 1

    review_id = Identifier(required=True)
    burger_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    rating = Integer(required=True)
    submitted_at = DateTime(required=True)
