"""Repository for the Review aggregate."""

from storefront.domain import storefront
from storefront.reviews.review.review import Review
from storefront.utils.query import fetch_all


@storefront.repository(part_of=Review)
class ReviewRepository:
    def for_burger(self, burger_id) -> list[Review]:
        return fetch_all(self._dao.query.filter(burger_id=str(burger_id)))

    def find_for(self, customer_id, burger_id) -> Review | None:
        return (
            self._dao.query.filter(customer_id=str(customer_id), burger_id=str(burger_id)).all().first
        )

    def newest(self, limit: int) -> list[Review]:
        return self._dao.query.filter(is_approved=True).order_by("-created_at").limit(limit).all().items
