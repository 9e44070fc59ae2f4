"""Burger rating recomputation — reacts to ReviewSubmitted.

The rating is the mean of every review rating for the burger, rounded half-up
to one decimal place; review_count is the number of those ratings. A burger
without reviews reads 0.0 / 0.
"""

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal

import structlog
from protean import handle
from protean.utils.globals import current_domain

from storefront.catalogue.burger.burger import Burger
from storefront.domain import storefront
from storefront.reviews.review.events import ReviewSubmitted
from storefront.reviews.review.review import Review

logger = structlog.get_logger(__name__)

_ONE_DECIMAL = Decimal("0.1")


def rating_summary(ratings: Iterable[int]) -> tuple[float, int]:
    """Return ``(average rounded half-up to 0.1, count)``."""
    ratings = list(ratings)
    if not ratings:
        return 0.0, 0
    mean = Decimal(sum(ratings)) / Decimal(len(ratings))
    return float(mean.quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP)), len(ratings)


@storefront.event_handler(part_of=Burger, stream_category="storefront::review")
class BurgerRatingHandler:
    @handle(ReviewSubmitted)
    def on_review_submitted(self, event: ReviewSubmitted) -> None:
        reviews = current_domain.repository_for(Review).for_burger(event.burger_id)
        rating, count = rating_summary(r.rating for r in reviews)

        repo = current_domain.repository_for(Burger)
        burger = repo.get(event.burger_id)
        burger.record_rating(rating, count)
        repo.add(burger)

        logger.info("burger_rating_recalculated", burger_id=str(burger.id), rating=rating, review_count=count)
