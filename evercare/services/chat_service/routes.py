from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from evercare.services.chat_service.dependencies import get_chat_service
from evercare.services.chat_service.service import ChatService
from evercare.shared.models.chat_dto import (
    ChatMessageDTO,
    ChatSummaryDTO,
    CreateChatRequest,
    CreateChatResponse,
    MarkReadRequest,
    MarkReadResponse,
    OnlineStatusResponse,
    SendMessageRequest,
    SendMessageResponse,
    UnreadCountResponse,
)

router = APIRouter(prefix="/chat", tags=["Chat"])


@router.post("/send", response_model=SendMessageResponse, status_code=status.HTTP_201_CREATED)
async def send_message(
    request: SendMessageRequest,
    service: ChatService = Depends(get_chat_service)
):
    message = await service.send_message(request)
    return SendMessageResponse(data=message)


@router.get("/messages", response_model=List[ChatMessageDTO])
async def get_messages(
    user1: int,
    user2: int,
    limit: Optional[int] = Query(default=None, ge=1),
    offset: int = Query(default=0, ge=0),
    service: ChatService = Depends(get_chat_service)
):
    return await service.get_messages(user1, user2, limit, offset)


@router.get("/list/{user_id}", response_model=List[ChatSummaryDTO])
async def get_chat_list(
    user_id: int,
    service: ChatService = Depends(get_chat_service)
):
    return await service.get_chat_list(user_id)


@router.post("/create", response_model=CreateChatResponse)
async def create_or_get_chat(
    request: CreateChatRequest,
    service: ChatService = Depends(get_chat_service)
):
    try:
        chat_id = service.create_chat(request.user1_id, request.user2_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return CreateChatResponse(chat_id=chat_id)


@router.post("/mark-read", response_model=MarkReadResponse)
async def mark_as_read(
    request: MarkReadRequest,
    service: ChatService = Depends(get_chat_service)
):
    try:
        updated = await service.mark_read(request.chat_id, request.user_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return MarkReadResponse(updated=updated)


@router.get("/unread-count/{user_id}", response_model=UnreadCountResponse)
async def get_unread_count(
    user_id: int,
    service: ChatService = Depends(get_chat_service)
):
    count = await service.get_unread_count(user_id)
    return UnreadCountResponse(count=count)


@router.get("/online/{user_id}", response_model=OnlineStatusResponse)
async def get_online_status(
    user_id: int,
    service: ChatService = Depends(get_chat_service)
):
    return OnlineStatusResponse(user_id=user_id, is_online=service.is_online(user_id))
