from datetime import datetime
from typing import Optional

from pydantic import Field

from evercare.shared.models.common import CamelModel
from evercare.shared.models.enums import NotificationType

INTEREST_MESSAGE = "A caregiver is interested in your post!"


class PostDTO(CamelModel):
    """Объявление careseeker о поиске ухода."""
    post_id: int
    careseeker_id: Optional[int] = None
    caregiver_id: Optional[int] = None
    caregiver_name: Optional[str] = None
    age: Optional[int] = None
    care_type: str
    duration: str
    district: str
    urgency: str
    description: str
    created_at: Optional[datetime] = None


class CreatePostRequest(CamelModel):
    careseeker_id: int
    caregiver_id: Optional[int] = None
    caregiver_name: Optional[str] = None
    age: Optional[int] = Field(default=None, ge=0)
    care_type: str = Field(min_length=1)
    duration: str = Field(min_length=1)
    district: str = Field(min_length=1)
    urgency: str = Field(min_length=1)
    description: str = Field(min_length=1)


class UpdatePostRequest(CamelModel):
    description: Optional[str] = None


class PostResponse(CamelModel):
    message: str
    job: PostDTO


class NotificationDTO(CamelModel):
    notification_id: int
    careseeker_id: int
    caregiver_id: int
    post_id: int
    type: NotificationType = NotificationType.INTEREST
    message: str = INTEREST_MESSAGE
    created_at: datetime


class CreateNotificationRequest(CamelModel):
    post_id: int
    caregiver_id: int
    careseeker_id: int


class NotificationResponse(CamelModel):
    success: bool = True
    notification: NotificationDTO


class NotificationWithPostDTO(NotificationDTO):
    """Уведомление вместе с объявлением, к которому оно относится."""
    post: Optional[PostDTO] = None


