# evercare/services/chat_service/realtime/rooms.py
"""
Комнаты чатов: какие соединения подписаны на какой диалог.
"""

from __future__ import annotations


def chat_id_for(user_a: int | str, user_b: int | str, separator: str = "_") -> str:
    """
    Идентификатор диалога двух пользователей.

    Симметричен: chat_id_for(a, b) == chat_id_for(b, a).
    Идентификаторы сравниваются как строки, поэтому chat_id_for(9, 10) == "10_9".
    Клиенты вычисляют тот же id у себя, так что порядок сортировки менять нельзя.
    """
    first, second = sorted((str(user_a), str(user_b)))
    return f"{first}{separator}{second}"


def parse_chat_id(chat_id: str, separator: str = "_") -> tuple[int, int]:
    """
    Разбирает chat_id обратно на двух участников.

    Raises:
        ValueError: если chat_id не состоит из двух числовых частей
    """
    parts = chat_id.split(separator)
    if len(parts) != 2:
        raise ValueError(f"Некорректный chat_id: {chat_id!r}")
    return int(parts[0]), int(parts[1])


class RoomMembership:
    """
    Многие-ко-многим: соединение <-> комната.

    join идемпотентен, leave из комнаты, куда не входили, ничего не делает.
    """

    def __init__(self) -> None:
        # chat_id -> set of connection_ids
        self._members: dict[str, set[str]] = {}
        # connection_id -> set of chat_ids
        self._rooms_of: dict[str, set[str]] = {}

    def join(self, connection_id: str, chat_id: str) -> None:
        self._members.setdefault(chat_id, set()).add(connection_id)
        self._rooms_of.setdefault(connection_id, set()).add(chat_id)

    def leave(self, connection_id: str, chat_id: str) -> None:
        members = self._members.get(chat_id)
        if members is not None:
            members.discard(connection_id)
            if not members:
                del self._members[chat_id]

        rooms = self._rooms_of.get(connection_id)
        if rooms is not None:
            rooms.discard(chat_id)
            if not rooms:
                del self._rooms_of[connection_id]

    def members_of(self, chat_id: str) -> set[str]:
        """Копия множества подписчиков; пустое множество для неизвестной комнаты."""
        return set(self._members.get(chat_id, ()))

    def rooms_of(self, connection_id: str) -> set[str]:
        return set(self._rooms_of.get(connection_id, ()))

    def leave_all(self, connection_id: str) -> set[str]:
        """
        Убирает соединение из всех комнат.

        Returns:
            Комнаты, из которых соединение было удалено
        """
        rooms = self._rooms_of.pop(connection_id, set())
        for chat_id in rooms:
            members = self._members.get(chat_id)
            if members is None:
                continue
            members.discard(connection_id)
            if not members:
                del self._members[chat_id]
        return rooms

    @property
    def room_count(self) -> int:
        return len(self._members)
