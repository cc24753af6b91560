# evercare/services/chat_service/realtime/events.py
"""
Модели событий WebSocket.

Кадр в обе стороны: {"event": <имя>, "data": {...}}, поля data в camelCase.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field

from evercare.common.constants import UserType
from evercare.shared.models.common import CamelModel


class Envelope(BaseModel):
    """Входящий кадр от клиента."""
    event: str
    data: dict[str, Any] = Field(default_factory=dict)


# === CLIENT -> SERVER ===

class UserOnlinePayload(CamelModel):
    user_id: int
    user_type: UserType


class JoinChatPayload(CamelModel):
    chat_id: str = Field(min_length=1)


class LeaveChatPayload(CamelModel):
    chat_id: str = Field(min_length=1)


class SendMessagePayload(CamelModel):
    sender_id: int
    receiver_id: int
    content: str = Field(min_length=1)
    sender_name: str = ""
    sender_type: Optional[UserType] = None


class TypingPayload(CamelModel):
    receiver_id: int
    is_typing: bool
    chat_id: str = Field(min_length=1)


# === SERVER -> CLIENT ===

class ChatMessageEvent(CamelModel):
    """Сообщение, разосланное получателям. Не хранится после доставки."""
    id: str
    sender_id: int
    receiver_id: int
    content: str
    timestamp: str
    sender_name: str = ""
    sender_type: Optional[UserType] = None


class UserStatusChange(CamelModel):
    user_id: int
    is_online: bool


class UserTyping(CamelModel):
    user_id: int
    is_typing: bool
    chat_id: str


class ErrorEvent(CamelModel):
    message: str
    details: Any = None


def dump_event(model: BaseModel) -> dict[str, Any]:
    """Сериализует модель события для отправки клиенту."""
    return model.model_dump(by_alias=True, mode="json")
