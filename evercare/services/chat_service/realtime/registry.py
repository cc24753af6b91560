# evercare/services/chat_service/realtime/registry.py
"""
Реестр соединений и присутствия пользователей.

Не потокобезопасен сам по себе: все вызовы сериализуются замком ChatHub.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from evercare.common.constants import UserType
from evercare.services.chat_service.realtime.connection import ClientConnection


@dataclass
class PresenceEntry:
    """Привязка пользователя к его текущему соединению."""
    connection_id: str
    user_type: UserType
    since: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class ConnectionRegistry:
    """
    Соединения и присутствие.

    Инвариант: на одного пользователя не больше одной PresenceEntry.
    Повторный user_online того же пользователя перезаписывает запись
    (побеждает последний).
    """

    def __init__(self) -> None:
        # connection_id -> ClientConnection
        self._connections: dict[str, ClientConnection] = {}
        # user_id -> PresenceEntry
        self._presence: dict[int, PresenceEntry] = {}
        # connection_id -> user_id (только актуальные привязки)
        self._bound: dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._connections)

    def __contains__(self, connection_id: object) -> bool:
        return connection_id in self._connections

    def register(self, connection: ClientConnection) -> str:
        """Регистрирует новое соединение и возвращает его идентификатор."""
        self._connections[connection.connection_id] = connection
        return connection.connection_id

    def get(self, connection_id: str) -> ClientConnection | None:
        return self._connections.get(connection_id)

    def connections(self) -> list[ClientConnection]:
        """Снимок всех живых соединений."""
        return list(self._connections.values())

    def announce_presence(
        self,
        connection_id: str,
        user_id: int,
        user_type: UserType,
    ) -> int | None:
        """
        Привязывает пользователя к соединению.

        Старое соединение пользователя (если было) перестаёт находиться
        через lookup_by_user, но остаётся в комнатах.

        Returns:
            Пользователь, ранее привязанный к этому же соединению и
            вытесненный новой привязкой, иначе None
        """
        connection = self._connections.get(connection_id)
        if connection is None:
            return None

        previous = self._presence.get(user_id)
        if previous is not None and previous.connection_id != connection_id:
            self._bound.pop(previous.connection_id, None)

        displaced = self._bound.get(connection_id)
        if displaced is not None and displaced != user_id:
            self._presence.pop(displaced, None)
        else:
            displaced = None

        self._presence[user_id] = PresenceEntry(connection_id=connection_id, user_type=user_type)
        self._bound[connection_id] = user_id
        connection.user_id = user_id
        connection.user_type = user_type
        return displaced

    def lookup_by_user(self, user_id: int) -> str | None:
        """Текущее соединение пользователя или None."""
        entry = self._presence.get(user_id)
        return entry.connection_id if entry else None

    def presence_of(self, user_id: int) -> PresenceEntry | None:
        return self._presence.get(user_id)

    def user_of(self, connection_id: str) -> int | None:
        """Пользователь, для которого это соединение является текущим."""
        return self._bound.get(connection_id)

    def is_online(self, user_id: int) -> bool:
        return user_id in self._presence

    def online_users(self) -> list[int]:
        return list(self._presence)

    def unregister(self, connection_id: str) -> int | None:
        """
        Удаляет соединение. Повторный вызов или неизвестный id ничего не делают.

        Returns:
            Пользователь, чья привязка снята (для рассылки offline), иначе None
        """
        connection = self._connections.pop(connection_id, None)
        if connection is None:
            return None

        user_id = self._bound.pop(connection_id, None)
        if user_id is not None:
            entry = self._presence.get(user_id)
            if entry is not None and entry.connection_id == connection_id:
                del self._presence[user_id]
        return user_id

    def count_by_type(self) -> dict[str, int]:
        """Подсчёт присутствующих пользователей по роли."""
        counts: dict[str, int] = {}
        for entry in self._presence.values():
            key = entry.user_type.value
            counts[key] = counts.get(key, 0) + 1
        return counts
