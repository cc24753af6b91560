# tests/services/test_chat_registry_unit.py
"""
Тесты реестра соединений и комнат чата.
"""

from unittest.mock import MagicMock

import pytest

from evercare.common.constants import UserType
from evercare.services.chat_service.realtime.connection import ClientConnection
from evercare.services.chat_service.realtime.registry import ConnectionRegistry
from evercare.services.chat_service.realtime.rooms import (
    RoomMembership,
    chat_id_for,
    parse_chat_id,
)


def _connection() -> ClientConnection:
    return ClientConnection(MagicMock(), queue_size=4)


@pytest.fixture
def registry() -> ConnectionRegistry:
    return ConnectionRegistry()


class TestConnectionRegistry:
    """Соединения и присутствие пользователей."""

    def test_register_without_user(self, registry: ConnectionRegistry) -> None:
        conn = _connection()
        cid = registry.register(conn)

        assert cid in registry
        assert len(registry) == 1
        assert registry.get(cid) is conn
        assert registry.user_of(cid) is None
        assert conn.user_id is None

    def test_announce_presence_binds_user(self, registry: ConnectionRegistry) -> None:
        conn = _connection()
        cid = registry.register(conn)

        displaced = registry.announce_presence(cid, 10, UserType.CAREGIVER)

        assert displaced is None
        assert registry.lookup_by_user(10) == cid
        assert registry.user_of(cid) == 10
        assert registry.is_online(10)
        assert registry.presence_of(10).user_type is UserType.CAREGIVER
        assert conn.user_id == 10
        assert conn.user_type is UserType.CAREGIVER

    def test_announce_unknown_connection(self, registry: ConnectionRegistry) -> None:
        assert registry.announce_presence("missing", 10, UserType.CAREGIVER) is None
        assert registry.lookup_by_user(10) is None

    def test_last_writer_wins(self, registry: ConnectionRegistry) -> None:
        """Второе соединение того же пользователя заменяет первое."""
        first = registry.register(_connection())
        second = registry.register(_connection())

        registry.announce_presence(first, 10, UserType.CAREGIVER)
        registry.announce_presence(second, 10, UserType.CAREGIVER)

        assert registry.lookup_by_user(10) == second
        assert registry.user_of(first) is None
        assert registry.online_users() == [10]

    def test_reannounce_as_other_user_displaces(self, registry: ConnectionRegistry) -> None:
        cid = registry.register(_connection())
        registry.announce_presence(cid, 10, UserType.CAREGIVER)

        displaced = registry.announce_presence(cid, 20, UserType.CARESEEKER)

        assert displaced == 10
        assert not registry.is_online(10)
        assert registry.lookup_by_user(20) == cid

    def test_reannounce_same_user_is_not_displacement(self, registry: ConnectionRegistry) -> None:
        cid = registry.register(_connection())
        registry.announce_presence(cid, 10, UserType.CAREGIVER)

        assert registry.announce_presence(cid, 10, UserType.CAREGIVER) is None
        assert registry.lookup_by_user(10) == cid

    def test_unregister_removes_presence(self, registry: ConnectionRegistry) -> None:
        cid = registry.register(_connection())
        registry.announce_presence(cid, 10, UserType.CAREGIVER)

        assert registry.unregister(cid) == 10
        assert cid not in registry
        assert registry.lookup_by_user(10) is None

    def test_unregister_is_idempotent(self, registry: ConnectionRegistry) -> None:
        cid = registry.register(_connection())
        registry.announce_presence(cid, 10, UserType.CAREGIVER)

        registry.unregister(cid)

        assert registry.unregister(cid) is None
        assert registry.unregister("never-registered") is None

    def test_stale_connection_keeps_newer_presence(self, registry: ConnectionRegistry) -> None:
        """Отключение вытесненного соединения не снимает новую привязку."""
        stale = registry.register(_connection())
        fresh = registry.register(_connection())
        registry.announce_presence(stale, 10, UserType.CAREGIVER)
        registry.announce_presence(fresh, 10, UserType.CAREGIVER)

        assert registry.unregister(stale) is None
        assert registry.lookup_by_user(10) == fresh

    def test_count_by_type(self, registry: ConnectionRegistry) -> None:
        for user_id, user_type in [(1, UserType.CAREGIVER), (2, UserType.CAREGIVER), (3, UserType.CARESEEKER)]:
            registry.announce_presence(registry.register(_connection()), user_id, user_type)

        assert registry.count_by_type() == {"caregiver": 2, "careseeker": 1}


class TestChatId:
    """Идентификатор диалога двух пользователей."""

    def test_symmetric(self) -> None:
        assert chat_id_for(10, 20) == chat_id_for(20, 10) == "10_20"

    def test_string_ordering(self) -> None:
        assert chat_id_for(9, 10) == "10_9"

    def test_custom_separator(self) -> None:
        assert chat_id_for(3, 4, separator=":") == "3:4"

    def test_parse(self) -> None:
        assert parse_chat_id("10_9") == (10, 9)

    @pytest.mark.parametrize("bad", ["10", "10_20_30", "a_b", ""])
    def test_parse_invalid(self, bad: str) -> None:
        with pytest.raises(ValueError):
            parse_chat_id(bad)


class TestRoomMembership:
    """Подписки соединений на комнаты."""

    def test_join_is_idempotent(self) -> None:
        rooms = RoomMembership()
        rooms.join("c1", "10_20")
        rooms.join("c1", "10_20")

        assert rooms.members_of("10_20") == {"c1"}
        assert rooms.room_count == 1

    def test_leave_without_join_is_noop(self) -> None:
        rooms = RoomMembership()
        rooms.join("c1", "10_20")

        rooms.leave("c2", "10_20")
        rooms.leave("c1", "unknown")

        assert rooms.members_of("10_20") == {"c1"}

    def test_leave_drops_empty_room(self) -> None:
        rooms = RoomMembership()
        rooms.join("c1", "10_20")
        rooms.leave("c1", "10_20")

        assert rooms.members_of("10_20") == set()
        assert rooms.room_count == 0

    def test_members_of_returns_copy(self) -> None:
        rooms = RoomMembership()
        rooms.join("c1", "10_20")

        rooms.members_of("10_20").add("intruder")

        assert rooms.members_of("10_20") == {"c1"}

    def test_leave_all(self) -> None:
        rooms = RoomMembership()
        rooms.join("c1", "10_20")
        rooms.join("c1", "10_30")
        rooms.join("c2", "10_20")

        left = rooms.leave_all("c1")

        assert left == {"10_20", "10_30"}
        assert rooms.members_of("10_20") == {"c2"}
        assert rooms.members_of("10_30") == set()
        assert rooms.rooms_of("c1") == set()
        assert rooms.leave_all("c1") == set()
