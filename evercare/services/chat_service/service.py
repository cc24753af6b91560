from typing import List

from evercare.common.logger import log_info
from evercare.common.constants import TypeMsg
from evercare.services.chat_service.realtime.hub import ChatHub
from evercare.services.chat_service.realtime.rooms import chat_id_for, parse_chat_id
from evercare.services.chat_service.repository import ChatRepository
from evercare.shared.models.chat_dto import ChatMessageDTO, ChatSummaryDTO, SendMessageRequest


class ChatService:
    def __init__(
        self,
        repository: ChatRepository,
        hub: ChatHub,
        separator: str = "_",
        default_limit: int = 50,
        max_limit: int = 200,
    ):
        self.repository = repository
        self.hub = hub
        self.separator = separator
        self.default_limit = default_limit
        self.max_limit = max_limit

    async def send_message(self, request: SendMessageRequest) -> ChatMessageDTO:
        message = await self.repository.save_message(
            request.sender_id, request.receiver_id, request.content
        )
        await log_info(
            f"Сообщение {message.id}: {request.sender_id} -> {request.receiver_id}",
            type_msg=TypeMsg.DEBUG,
            logger_name="chat_service",
        )
        return message

    async def get_messages(
        self,
        user1_id: int,
        user2_id: int,
        limit: int | None = None,
        offset: int = 0,
    ) -> List[ChatMessageDTO]:
        """История переписки. limit ограничивается сверху настройкой max_limit."""
        if limit is None:
            limit = self.default_limit
        limit = max(1, min(limit, self.max_limit))
        offset = max(0, offset)
        return await self.repository.get_messages_between(user1_id, user2_id, limit, offset)

    async def get_chat_list(self, user_id: int) -> List[ChatSummaryDTO]:
        """Список диалогов пользователя; статус онлайн берётся из живого hub."""
        rows = await self.repository.get_conversations(user_id)
        chats = []
        for row in rows:
            participant_id = row["participant_id"]
            last_message = ChatMessageDTO(
                id=row["id"],
                sender_id=row["sender_id"],
                receiver_id=row["receiver_id"],
                content=row["content"],
                timestamp=row["timestamp"],
                is_read=row["is_read"],
            )
            chats.append(
                ChatSummaryDTO(
                    chat_id=chat_id_for(user_id, participant_id, self.separator),
                    participant_id=participant_id,
                    is_online=self.hub.is_online(participant_id),
                    last_message=last_message,
                    unread_count=row["unread_count"],
                    updated_at=last_message.timestamp,
                )
            )
        return chats

    def create_chat(self, user1_id: int, user2_id: int) -> str:
        if user1_id == user2_id:
            raise ValueError("Cannot create chat with yourself")
        return chat_id_for(user1_id, user2_id, self.separator)

    async def mark_read(self, chat_id: str, user_id: int) -> int:
        """
        Отмечает прочитанными входящие сообщения пользователя в диалоге.

        Raises:
            ValueError: некорректный chat_id или пользователь не участник диалога
        """
        try:
            first, second = parse_chat_id(chat_id, self.separator)
        except ValueError:
            raise ValueError(f"Invalid chat id: {chat_id}") from None

        if user_id == first:
            other_id = second
        elif user_id == second:
            other_id = first
        else:
            raise ValueError(f"User {user_id} is not a participant of chat {chat_id}")

        updated = await self.repository.mark_read(user_id, other_id)
        await log_info(
            f"Чат {chat_id}: пользователь {user_id} прочитал {updated} сообщений",
            type_msg=TypeMsg.DEBUG,
            logger_name="chat_service",
        )
        return updated

    async def get_unread_count(self, user_id: int) -> int:
        return await self.repository.count_unread(user_id)

    def is_online(self, user_id: int) -> bool:
        return self.hub.is_online(user_id)
