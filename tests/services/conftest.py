# tests/services/conftest.py
"""
Фикстуры realtime-слоя чата.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable

import pytest
import pytest_asyncio

from evercare.common.constants import UserType
from evercare.services.chat_service.realtime.connection import ClientConnection
from evercare.services.chat_service.realtime.hub import ChatHub


class FakeWebSocket:
    """Сокет, который запоминает отправленные кадры."""

    def __init__(self, fail: bool = False) -> None:
        self.sent: list[dict[str, Any]] = []
        self.fail = fail

    async def send_json(self, data: dict[str, Any]) -> None:
        if self.fail:
            raise RuntimeError("socket closed")
        self.sent.append(data)

    def events(self, name: str) -> list[dict[str, Any]]:
        """Данные всех кадров с указанным событием."""
        return [frame["data"] for frame in self.sent if frame["event"] == name]


ConnectFactory = Callable[..., Awaitable[ClientConnection]]


@pytest.fixture
def fake_ws_factory() -> Callable[..., FakeWebSocket]:
    return FakeWebSocket


@pytest_asyncio.fixture
async def hub() -> ChatHub:
    chat_hub = ChatHub(queue_size=16)
    yield chat_hub
    await chat_hub.close()


@pytest.fixture
def connect(hub: ChatHub) -> ConnectFactory:
    """
    Регистрирует соединение с запущенным писателем и,
    если передан user_id, объявляет пользователя онлайн.
    """

    async def _connect(
        user_id: int | None = None,
        user_type: UserType = UserType.CAREGIVER,
        start_writer: bool = True,
    ) -> ClientConnection:
        connection = await hub.register(FakeWebSocket())
        if start_writer:
            connection.start_writer()
        if user_id is not None:
            await hub.announce_presence(connection.connection_id, user_id, user_type)
        return connection

    return _connect


async def flush_all(*connections: ClientConnection) -> None:
    """Дожидается отправки всех поставленных в очередь событий."""
    for connection in connections:
        await connection.flush()


@pytest.fixture
def flush() -> Callable[..., Awaitable[None]]:
    return flush_all
