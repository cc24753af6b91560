from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from evercare.services.jobposting_service.dependencies import get_jobposting_service, get_notification_service
from evercare.services.jobposting_service.service import JobPostingService, NotificationService
from evercare.shared.models.common import MessageResponse
from evercare.shared.models.post_dto import (
    CreateNotificationRequest,
    CreatePostRequest,
    NotificationResponse,
    NotificationWithPostDTO,
    PostDTO,
    PostResponse,
    UpdatePostRequest,
)

router = APIRouter(prefix="/jobposting", tags=["Job posts"])
notifications_router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    request: CreatePostRequest,
    service: JobPostingService = Depends(get_jobposting_service)
):
    post = await service.create_post(request)
    return PostResponse(message="Post created successfully", job=post)


@router.get("", response_model=List[PostDTO])
async def get_all_posts(
    service: JobPostingService = Depends(get_jobposting_service)
):
    return await service.get_all_posts()


@router.get("/careseeker/{careseeker_id}", response_model=List[PostDTO])
async def get_posts_by_careseeker(
    careseeker_id: int,
    service: JobPostingService = Depends(get_jobposting_service)
):
    return await service.get_posts_by_careseeker(careseeker_id)


@router.delete("/{post_id}", response_model=MessageResponse)
async def delete_post(
    post_id: int,
    service: JobPostingService = Depends(get_jobposting_service)
):
    if not await service.delete_post(post_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
    return MessageResponse(message="Post deleted successfully")


@router.put("/{post_id}", response_model=PostDTO)
async def update_post(
    post_id: int,
    request: UpdatePostRequest,
    service: JobPostingService = Depends(get_jobposting_service)
):
    post = await service.update_post(post_id, request.description)
    if not post:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
    return post


@notifications_router.post("", response_model=NotificationResponse, status_code=status.HTTP_201_CREATED)
async def create_notification(
    request: CreateNotificationRequest,
    service: NotificationService = Depends(get_notification_service)
):
    try:
        notification = await service.notify_interest(request)
    except LookupError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return NotificationResponse(notification=notification)


@notifications_router.get("/careseeker/{careseeker_id}", response_model=List[NotificationWithPostDTO])
async def get_notifications_by_careseeker(
    careseeker_id: int,
    service: NotificationService = Depends(get_notification_service)
):
    return await service.get_for_careseeker(careseeker_id)
