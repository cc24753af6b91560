from datetime import datetime
from typing import Optional, List

from pydantic import Field

from evercare.shared.models.common import CamelModel

MIN_RATING = 1
MAX_RATING = 5


class ReviewDTO(CamelModel):
    review_id: int
    caregiver_id: int
    careseeker_id: int
    rating: int
    comment: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class CreateReviewRequest(CamelModel):
    caregiver_id: int
    careseeker_id: int
    rating: int = Field(ge=MIN_RATING, le=MAX_RATING)
    comment: Optional[str] = None


class ReviewResponse(CamelModel):
    message: str
    review: ReviewDTO


class SingleReviewResponse(CamelModel):
    review: ReviewDTO


class ReviewPageResponse(CamelModel):
    reviews: List[ReviewDTO]
    total: int
    page: int
    limit: int
    total_pages: int


class CaregiverRatingResponse(CamelModel):
    caregiver_id: int
    average_rating: float = 0
    total_reviews: int = 0
