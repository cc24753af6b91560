from datetime import datetime
from typing import Optional

from pydantic import Field

from evercare.shared.models.common import CamelModel


class ChatMessageDTO(CamelModel):
    """Сохранённое сообщение чата."""
    id: int
    sender_id: int
    receiver_id: int
    content: str
    timestamp: datetime
    is_read: bool = False


class SendMessageRequest(CamelModel):
    sender_id: int
    receiver_id: int
    content: str = Field(min_length=1)


class SendMessageResponse(CamelModel):
    message: str = "Message sent"
    data: ChatMessageDTO


class ChatSummaryDTO(CamelModel):
    """Элемент списка диалогов пользователя."""
    chat_id: str
    participant_id: int
    is_online: bool = False
    last_message: Optional[ChatMessageDTO] = None
    unread_count: int = 0
    updated_at: datetime


class CreateChatRequest(CamelModel):
    user1_id: int
    user2_id: int


class CreateChatResponse(CamelModel):
    chat_id: str


class MarkReadRequest(CamelModel):
    chat_id: str = Field(min_length=1)
    user_id: int


class MarkReadResponse(CamelModel):
    message: str = "Messages marked as read"
    updated: int = 0


class UnreadCountResponse(CamelModel):
    count: int


class OnlineStatusResponse(CamelModel):
    user_id: int
    is_online: bool


class ChatStatsResponse(CamelModel):
    """Статистика realtime-слоя."""
    active_connections: int
    online_users: int
    active_rooms: int
    total_connections_ever: int
    total_messages_sent: int
    total_events_dropped: int
    connections_by_type: dict[str, int]


