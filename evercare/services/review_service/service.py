from typing import Optional, Tuple

from evercare.common.logger import log_info
from evercare.common.constants import TypeMsg
from evercare.services.review_service.repository import ReviewRepository
from evercare.shared.models.common import PaginationParams, total_pages
from evercare.shared.models.review_dto import (
    CaregiverRatingResponse,
    CreateReviewRequest,
    ReviewDTO,
    ReviewPageResponse,
)


class ReviewService:
    def __init__(self, repository: ReviewRepository):
        self.repository = repository

    async def submit_review(self, request: CreateReviewRequest) -> Tuple[ReviewDTO, bool]:
        """
        Один отзыв на пару caregiver/careseeker: повторная отправка обновляет его.

        Returns:
            (отзыв, True если создан новый)
        """
        review, created = await self.repository.upsert_review(
            request.caregiver_id, request.careseeker_id, request.rating, request.comment or ""
        )
        if created:
            message = f"Новый отзыв {review.review_id} для caregiver {request.caregiver_id}"
        else:
            message = f"Отзыв {review.review_id} обновлён (caregiver {request.caregiver_id})"
        await log_info(message, type_msg=TypeMsg.INFO, logger_name="review_service")
        return review, created

    async def get_caregiver_reviews(self, caregiver_id: int, pagination: PaginationParams) -> ReviewPageResponse:
        reviews, total = await self.repository.get_by_caregiver(
            caregiver_id, pagination.limit, pagination.offset
        )
        return ReviewPageResponse(
            reviews=reviews,
            total=total,
            page=pagination.page,
            limit=pagination.limit,
            total_pages=total_pages(total, pagination.limit),
        )

    async def get_caregiver_rating(self, caregiver_id: int) -> CaregiverRatingResponse:
        """Средняя оценка округляется до одного знака; без отзывов 0."""
        average, total = await self.repository.get_rating(caregiver_id)
        return CaregiverRatingResponse(
            caregiver_id=caregiver_id,
            average_rating=round(average, 1) if average else 0,
            total_reviews=total,
        )

    async def get_review(self, caregiver_id: int, careseeker_id: int) -> Optional[ReviewDTO]:
        return await self.repository.get_by_pair(caregiver_id, careseeker_id)

    async def delete_review(self, caregiver_id: int, careseeker_id: int) -> bool:
        deleted = await self.repository.delete_by_pair(caregiver_id, careseeker_id)
        if deleted:
            await log_info(
                f"Отзыв careseeker {careseeker_id} о caregiver {caregiver_id} удалён",
                type_msg=TypeMsg.INFO,
                logger_name="review_service",
            )
        return deleted
