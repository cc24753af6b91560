from typing import Optional, List

from evercare.common.logger import log_info
from evercare.common.constants import TypeMsg
from evercare.services.jobposting_service.repository import NotificationRepository, PostRepository
from evercare.shared.models.enums import NotificationType
from evercare.shared.models.post_dto import (
    INTEREST_MESSAGE,
    CreateNotificationRequest,
    CreatePostRequest,
    NotificationDTO,
    NotificationWithPostDTO,
    PostDTO,
)


class JobPostingService:
    def __init__(self, repository: PostRepository):
        self.repository = repository

    async def create_post(self, request: CreatePostRequest) -> PostDTO:
        post = await self.repository.create_post(request)
        await log_info(
            f"Объявление {post.post_id} от careseeker {request.careseeker_id}",
            type_msg=TypeMsg.INFO,
            logger_name="jobposting_service",
        )
        return post

    async def get_all_posts(self) -> List[PostDTO]:
        return await self.repository.get_all()

    async def get_posts_by_careseeker(self, careseeker_id: int) -> List[PostDTO]:
        return await self.repository.get_by_careseeker(careseeker_id)

    async def update_post(self, post_id: int, description: Optional[str]) -> Optional[PostDTO]:
        return await self.repository.update_description(post_id, description)

    async def delete_post(self, post_id: int) -> bool:
        deleted = await self.repository.delete_post(post_id)
        if deleted:
            await log_info(f"Объявление {post_id} удалено", type_msg=TypeMsg.INFO, logger_name="jobposting_service")
        return deleted


class NotificationService:
    def __init__(self, repository: NotificationRepository, posts: PostRepository):
        self.repository = repository
        self.posts = posts

    async def notify_interest(self, request: CreateNotificationRequest) -> NotificationDTO:
        """
        Caregiver откликнулся на объявление.

        Raises:
            LookupError: объявление не найдено
        """
        post = await self.posts.get_by_id(request.post_id)
        if post is None:
            raise LookupError(f"Post {request.post_id} not found")

        notification = await self.repository.create_notification(
            post_id=request.post_id,
            caregiver_id=request.caregiver_id,
            careseeker_id=request.careseeker_id,
            type=NotificationType.INTEREST,
            message=INTEREST_MESSAGE,
        )
        await log_info(
            f"Caregiver {request.caregiver_id} заинтересован в объявлении {request.post_id}",
            type_msg=TypeMsg.INFO,
            logger_name="jobposting_service",
        )
        return notification

    async def get_for_careseeker(self, careseeker_id: int) -> List[NotificationWithPostDTO]:
        """Уведомления careseeker (новые первыми) вместе с объявлениями."""
        notifications = await self.repository.get_by_careseeker(careseeker_id)
        posts = await self.posts.get_by_ids(n.post_id for n in notifications)
        posts_by_id = {p.post_id: p for p in posts}
        return [
            NotificationWithPostDTO(**n.model_dump(), post=posts_by_id.get(n.post_id))
            for n in notifications
        ]
