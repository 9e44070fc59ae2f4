"""FastAPI routes for reviewing delivered burgers."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from storefront.api.deps import require_user
from storefront.api.schemas import ReviewIdResponse, SubmitReviewRequest
from storefront.identity.port import Caller
from storefront.reviews.queries import recent_reviews
from storefront.reviews.review.submission import SubmitReview

review_router = APIRouter(prefix="/reviews", tags=["reviews"])


@review_router.post("", status_code=201, response_model=ReviewIdResponse)
async def submit_review(body: SubmitReviewRequest, caller: Caller = Depends(require_user)) -> ReviewIdResponse:
    command = SubmitReview(
        customer_id=caller.user_id,
        burger_id=body.burger_id,
        rating=body.rating,
        comment=body.comment,
    )
    review_id = current_domain.process(command, asynchronous=False)
    return ReviewIdResponse(review_id=review_id)


@review_router.get("/recent")
async def get_recent_reviews(limit: int = 5) -> list[dict]:
    return recent_reviews(limit)
