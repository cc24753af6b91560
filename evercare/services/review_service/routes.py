from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from evercare.services.review_service.dependencies import get_review_service
from evercare.services.review_service.service import ReviewService
from evercare.shared.models.common import MessageResponse, PaginationParams
from evercare.shared.models.review_dto import (
    CaregiverRatingResponse,
    CreateReviewRequest,
    ReviewPageResponse,
    ReviewResponse,
    SingleReviewResponse,
)

router = APIRouter(prefix="/api/reviews", tags=["Reviews"])


@router.post("", response_model=ReviewResponse, status_code=status.HTTP_201_CREATED)
async def create_review(
    request: CreateReviewRequest,
    response: Response,
    service: ReviewService = Depends(get_review_service)
):
    review, created = await service.submit_review(request)
    if not created:
        response.status_code = status.HTTP_200_OK
        return ReviewResponse(message="Review updated successfully", review=review)
    return ReviewResponse(message="Review created successfully", review=review)


@router.get("/caregiver/{caregiver_id}", response_model=ReviewPageResponse)
async def get_caregiver_reviews(
    caregiver_id: int,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    service: ReviewService = Depends(get_review_service)
):
    return await service.get_caregiver_reviews(caregiver_id, PaginationParams(page=page, limit=limit))


@router.get("/caregiver/{caregiver_id}/rating", response_model=CaregiverRatingResponse)
async def get_caregiver_rating(
    caregiver_id: int,
    service: ReviewService = Depends(get_review_service)
):
    return await service.get_caregiver_rating(caregiver_id)


@router.get("/caregiver/{caregiver_id}/careseeker/{careseeker_id}", response_model=SingleReviewResponse)
async def get_review(
    caregiver_id: int,
    careseeker_id: int,
    service: ReviewService = Depends(get_review_service)
):
    review = await service.get_review(caregiver_id, careseeker_id)
    if not review:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Review not found")
    return SingleReviewResponse(review=review)


@router.delete("/caregiver/{caregiver_id}/careseeker/{careseeker_id}", response_model=MessageResponse)
async def delete_review(
    caregiver_id: int,
    careseeker_id: int,
    service: ReviewService = Depends(get_review_service)
):
    deleted = await service.delete_review(caregiver_id, careseeker_id)
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Review not found")
    return MessageResponse(message="Review deleted successfully")
