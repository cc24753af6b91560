from fastapi import Depends, Request

from evercare.config import settings
from evercare.infra.database import DatabaseManager
from evercare.services.chat_service.realtime.hub import ChatHub
from evercare.services.chat_service.repository import ChatRepository
from evercare.services.chat_service.service import ChatService


def get_database() -> DatabaseManager:
    return DatabaseManager()


def get_chat_hub(request: Request) -> ChatHub:
    """Hub создаётся в lifespan приложения и живёт в app.state."""
    return request.app.state.chat_hub


def get_chat_repository() -> ChatRepository:
    db = get_database()
    return ChatRepository(db)


def get_chat_service(
    repository: ChatRepository = Depends(get_chat_repository),
    hub: ChatHub = Depends(get_chat_hub),
) -> ChatService:
    return ChatService(
        repository,
        hub,
        separator=settings.chat.CHAT_ID_SEPARATOR,
        default_limit=settings.chat.HISTORY_DEFAULT_LIMIT,
        max_limit=settings.chat.HISTORY_MAX_LIMIT,
    )
