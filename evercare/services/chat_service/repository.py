from typing import Optional, List

from asyncpg import Record

from evercare.infra.database import DatabaseManager, parse_affected_rows
from evercare.shared.models.chat_dto import ChatMessageDTO

MESSAGE_COLUMNS = "id, sender_id, receiver_id, content, timestamp, is_read"


class ChatRepository:
    def __init__(self, db: DatabaseManager):
        self.db = db

    async def save_message(self, sender_id: int, receiver_id: int, content: str) -> ChatMessageDTO:
        """Сохраняет сообщение и возвращает его с id и временем сервера."""
        query = f"""
            INSERT INTO chat_schema.messages (sender_id, receiver_id, content)
            VALUES ($1, $2, $3)
            RETURNING {MESSAGE_COLUMNS}
        """
        record = await self.db.fetchrow(query, sender_id, receiver_id, content)
        return ChatMessageDTO(**dict(record))

    async def get_messages_between(
        self,
        user1_id: int,
        user2_id: int,
        limit: int,
        offset: int,
    ) -> List[ChatMessageDTO]:
        """Переписка двух пользователей в обе стороны, от старых к новым."""
        query = f"""
            SELECT {MESSAGE_COLUMNS}
            FROM chat_schema.messages
            WHERE (sender_id = $1 AND receiver_id = $2)
               OR (sender_id = $2 AND receiver_id = $1)
            ORDER BY timestamp ASC, id ASC
            LIMIT $3 OFFSET $4
        """
        records = await self.db.fetch(query, user1_id, user2_id, limit, offset)
        return [ChatMessageDTO(**dict(r)) for r in records]

    async def get_conversations(self, user_id: int) -> List[Record]:
        """
        Последнее сообщение и число непрочитанных по каждому собеседнику.
        Новые диалоги первыми.
        """
        query = """
            WITH last_messages AS (
                SELECT DISTINCT ON (CASE WHEN sender_id = $1 THEN receiver_id ELSE sender_id END)
                    CASE WHEN sender_id = $1 THEN receiver_id ELSE sender_id END AS participant_id,
                    id, sender_id, receiver_id, content, timestamp, is_read
                FROM chat_schema.messages
                WHERE sender_id = $1 OR receiver_id = $1
                ORDER BY
                    CASE WHEN sender_id = $1 THEN receiver_id ELSE sender_id END,
                    timestamp DESC,
                    id DESC
            )
            SELECT
                lm.participant_id, lm.id, lm.sender_id, lm.receiver_id,
                lm.content, lm.timestamp, lm.is_read,
                (
                    SELECT COUNT(*)
                    FROM chat_schema.messages m
                    WHERE m.sender_id = lm.participant_id
                      AND m.receiver_id = $1
                      AND NOT m.is_read
                ) AS unread_count
            FROM last_messages lm
            ORDER BY lm.timestamp DESC
        """
        return await self.db.fetch(query, user_id)

    async def mark_read(self, receiver_id: int, sender_id: int) -> int:
        """Отмечает прочитанными сообщения sender -> receiver. Возвращает количество."""
        query = """
            UPDATE chat_schema.messages
            SET is_read = TRUE
            WHERE receiver_id = $1 AND sender_id = $2 AND NOT is_read
        """
        status = await self.db.execute(query, receiver_id, sender_id)
        return parse_affected_rows(status)

    async def count_unread(self, user_id: int) -> int:
        query = """
            SELECT COUNT(*)
            FROM chat_schema.messages
            WHERE receiver_id = $1 AND NOT is_read
        """
        count: Optional[int] = await self.db.fetchval(query, user_id)
        return count or 0
