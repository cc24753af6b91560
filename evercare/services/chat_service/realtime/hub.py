# evercare/services/chat_service/realtime/hub.py
"""
Координатор realtime-чата.

Владеет реестром соединений и комнатами. Все изменения состояния
выполняются под одним asyncio.Lock. Доставка неблокирующая: событие
кладётся в очередь соединения, отправку выполняет его задача-писатель.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Any, Iterable

from fastapi import WebSocket

from evercare.common.constants import ServerEvent, UserType
from evercare.common.logger import log_debug, log_info, log_warning
from evercare.services.chat_service.realtime.connection import ClientConnection
from evercare.services.chat_service.realtime.events import (
    ChatMessageEvent,
    UserStatusChange,
    UserTyping,
    dump_event,
)
from evercare.services.chat_service.realtime.registry import ConnectionRegistry
from evercare.services.chat_service.realtime.rooms import RoomMembership, chat_id_for

LOGGER_NAME = "chat_service"


class ChatHub:
    """
    Presence, комнаты, рассылка сообщений и индикатор набора текста.

    Состояние живёт только в памяти процесса: после рестарта клиенты
    заново отправляют user_online и join_chat.
    """

    def __init__(self, queue_size: int = 256, separator: str = "_") -> None:
        self._registry = ConnectionRegistry()
        self._rooms = RoomMembership()
        self._lock = asyncio.Lock()
        self._queue_size = queue_size
        self._separator = separator

        # Для статистики
        self._total_connections: int = 0
        self._total_messages_sent: int = 0
        self._total_events_dropped: int = 0

    @property
    def registry(self) -> ConnectionRegistry:
        return self._registry

    @property
    def rooms(self) -> RoomMembership:
        return self._rooms

    @property
    def active_connections(self) -> int:
        return len(self._registry)

    # === CONNECTIONS ===

    async def register(self, websocket: WebSocket) -> ClientConnection:
        """Регистрирует принятый сокет. Пользователь ещё не известен."""
        connection = ClientConnection(websocket, queue_size=self._queue_size)
        async with self._lock:
            self._registry.register(connection)
            self._total_connections += 1
        await log_debug(f"Новое соединение {connection.connection_id}", logger_name=LOGGER_NAME)
        return connection

    async def announce_presence(self, connection_id: str, user_id: int, user_type: UserType) -> None:
        """
        user_online: привязывает пользователя к соединению и сообщает
        остальным соединениям, что он в сети.
        """
        async with self._lock:
            if connection_id not in self._registry:
                return
            displaced = self._registry.announce_presence(connection_id, user_id, user_type)
            if displaced is not None:
                await self._broadcast_status(displaced, False, exclude=connection_id)
            await self._broadcast_status(user_id, True, exclude=connection_id)

        await log_info(
            f"Пользователь {user_id} ({user_type.value}) в сети",
            logger_name=LOGGER_NAME,
            extra={"connection_id": connection_id},
        )

    async def disconnect(self, connection_id: str) -> None:
        """
        Отключение сокета: снимает регистрацию, выходит из всех комнат и,
        если соединение было текущим для пользователя, рассылает offline.
        Повторный вызов ничего не делает.
        """
        async with self._lock:
            connection = self._registry.get(connection_id)
            if connection is None:
                return
            user_id = self._registry.unregister(connection_id)
            self._rooms.leave_all(connection_id)
            if user_id is not None:
                await self._broadcast_status(user_id, False, exclude=connection_id)

        await connection.close()
        await log_info(
            f"Соединение {connection_id} закрыто (пользователь {user_id})",
            logger_name=LOGGER_NAME,
        )

    # === ROOMS ===

    async def join_chat(self, connection_id: str, chat_id: str) -> None:
        async with self._lock:
            if connection_id not in self._registry:
                return
            self._rooms.join(connection_id, chat_id)
        await log_debug(f"Соединение {connection_id} вошло в чат {chat_id}", logger_name=LOGGER_NAME)

    async def leave_chat(self, connection_id: str, chat_id: str) -> None:
        async with self._lock:
            self._rooms.leave(connection_id, chat_id)
        await log_debug(f"Соединение {connection_id} вышло из чата {chat_id}", logger_name=LOGGER_NAME)

    def members_of(self, chat_id: str) -> set[str]:
        return self._rooms.members_of(chat_id)

    # === PRESENCE ===

    def lookup_by_user(self, user_id: int) -> str | None:
        return self._registry.lookup_by_user(user_id)

    def is_online(self, user_id: int) -> bool:
        return self._registry.is_online(user_id)

    async def broadcast_online(self, user_id: int) -> int:
        """Сообщает всем, кроме соединения самого пользователя, что он в сети."""
        async with self._lock:
            own = self._registry.lookup_by_user(user_id)
            return await self._broadcast_status(user_id, True, exclude=own)

    async def broadcast_offline(self, user_id: int) -> int:
        """Сообщает всем, кроме соединения самого пользователя, что он не в сети."""
        async with self._lock:
            own = self._registry.lookup_by_user(user_id)
            return await self._broadcast_status(user_id, False, exclude=own)

    async def _broadcast_status(self, user_id: int, is_online: bool, exclude: str | None) -> int:
        payload = dump_event(UserStatusChange(user_id=user_id, is_online=is_online))
        targets = [
            connection.connection_id
            for connection in self._registry.connections()
            if connection.connection_id != exclude
        ]
        return await self._fanout(targets, ServerEvent.USER_STATUS_CHANGE, payload)

    # === MESSAGES ===

    async def send_message(
        self,
        sender_id: int,
        receiver_id: int,
        content: str,
        sender_name: str = "",
        sender_type: UserType | None = None,
    ) -> ChatMessageEvent:
        """
        Рассылает сообщение участникам комнаты и напрямую получателю.

        Каждое соединение получает не больше одной копии. Офлайн-получатель
        не считается ошибкой: сообщение всё равно возвращается отправителю.
        """
        now = datetime.now(timezone.utc)
        message = ChatMessageEvent(
            # Не уникален при нескольких отправках за одну миллисекунду
            id=f"{int(now.timestamp() * 1000)}_{sender_id}",
            sender_id=sender_id,
            receiver_id=receiver_id,
            content=content,
            timestamp=now.isoformat().replace("+00:00", "Z"),
            sender_name=sender_name,
            sender_type=sender_type,
        )
        payload = dump_event(message)
        chat_id = chat_id_for(sender_id, receiver_id, self._separator)

        async with self._lock:
            targets = self._rooms.members_of(chat_id)
            direct = self._registry.lookup_by_user(receiver_id)
            if direct is not None:
                targets.add(direct)
            delivered = await self._fanout(targets, ServerEvent.NEW_MESSAGE, payload)
            self._total_messages_sent += 1

        await log_debug(
            f"Сообщение {message.id} в чат {chat_id}: доставлено {delivered}",
            logger_name=LOGGER_NAME,
        )
        return message

    # === TYPING ===

    async def set_typing(
        self,
        connection_id: str,
        receiver_id: int,
        chat_id: str,
        is_typing: bool,
    ) -> int:
        """
        Индикатор набора текста. Если соединение не привязано к
        пользователю, событие молча отбрасывается. Дубликаты допустимы.
        """
        async with self._lock:
            sender_id = self._registry.user_of(connection_id)
            if sender_id is None:
                return 0

            payload = dump_event(UserTyping(user_id=sender_id, is_typing=is_typing, chat_id=chat_id))
            targets: list[str] = []
            direct = self._registry.lookup_by_user(receiver_id)
            if direct is not None:
                targets.append(direct)
            targets.extend(
                member for member in self._rooms.members_of(chat_id) if member != connection_id
            )
            return await self._fanout(targets, ServerEvent.USER_TYPING, payload)

    # === DELIVERY ===

    async def _fanout(self, connection_ids: Iterable[str], event: ServerEvent, data: dict[str, Any]) -> int:
        """Кладёт событие в очереди соединений. Вызывается под замком."""
        delivered = 0
        for connection_id in connection_ids:
            connection = self._registry.get(connection_id)
            if connection is None or connection.closed:
                continue
            if connection.deliver(event.value, data):
                delivered += 1
            else:
                self._total_events_dropped += 1
                await log_warning(
                    f"Очередь соединения {connection_id} переполнена, событие {event.value} отброшено",
                    logger_name=LOGGER_NAME,
                    extra={"pending": connection.pending},
                )
        return delivered

    # === STATS / SHUTDOWN ===

    def get_stats(self) -> dict[str, Any]:
        """Получить статистику."""
        return {
            "active_connections": len(self._registry),
            "online_users": len(self._registry.online_users()),
            "active_rooms": self._rooms.room_count,
            "total_connections_ever": self._total_connections,
            "total_messages_sent": self._total_messages_sent,
            "total_events_dropped": self._total_events_dropped,
            "connections_by_type": self._registry.count_by_type(),
        }

    async def close(self) -> None:
        """Останавливает писателей всех соединений и очищает состояние."""
        async with self._lock:
            connections = self._registry.connections()
            for connection in connections:
                self._registry.unregister(connection.connection_id)
                self._rooms.leave_all(connection.connection_id)

        for connection in connections:
            await connection.close()

        if connections:
            await log_info(f"Закрыто соединений: {len(connections)}", logger_name=LOGGER_NAME)

