"""Read side for reviews: per-burger pages and the recent feed."""

import math

from protean.utils.globals import current_domain

from storefront.catalogue.burger.burger import Burger
from storefront.reviews.review.review import Review

DEFAULT_PAGE_SIZE = 10


def review_view(review: Review, burger_name: str | None = None) -> dict:
    view = {
        "review_id": str(review.id),
        "burger_id": str(review.burger_id),
        "customer_id": str(review.customer_id),
        "customer_name": review.customer_name,
        "rating": review.rating,
        "comment": review.comment,
        "created_at": review.created_at,
    }
    if burger_name is not None:
        view["burger_name"] = burger_name
    return view


def burger_reviews(burger_id, page: int = 1, limit: int = DEFAULT_PAGE_SIZE) -> dict:
    """Approved reviews of a burger, newest first."""
    page = max(int(page or 1), 1)
    limit = max(int(limit or DEFAULT_PAGE_SIZE), 1)

    current_domain.repository_for(Burger).get(burger_id)

    approved = [r for r in current_domain.repository_for(Review).for_burger(burger_id) if r.is_approved]
    approved.sort(key=lambda r: r.created_at, reverse=True)

    start = (page - 1) * limit
    return {
        "reviews": [review_view(r) for r in approved[start : start + limit]],
        "total": len(approved),
        "page": page,
        "pages": math.ceil(len(approved) / limit) if approved else 0,
    }


def recent_reviews(limit: int = 5) -> list[dict]:
    """Most recent approved reviews across all burgers, with burger names."""
    reviews = current_domain.repository_for(Review).newest(limit)
    names = {
        burger_id: burger.name
        for burger_id, burger in current_domain.repository_for(Burger)
        .find_many({str(r.burger_id) for r in reviews})
        .items()
    }
    return [review_view(r, burger_name=names.get(str(r.burger_id), "")) for r in reviews]
