# tests/services/test_chat_app.py
"""
Тесты HTTP и WebSocket endpoints Chat Service.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from evercare.common.constants import UserType
from evercare.services.chat_service.app import app
from evercare.services.chat_service.dependencies import get_chat_hub, get_chat_service
from evercare.services.chat_service.realtime.hub import ChatHub
from evercare.services.chat_service.service import ChatService
from evercare.services.chat_service.socket_handler import handle_frame
from evercare.shared.models.chat_dto import ChatMessageDTO


def _receive_until(ws, event: str, predicate=lambda data: True) -> dict:
    """Читает кадры, пока не придёт нужное событие."""
    while True:
        frame = ws.receive_json()
        if frame["event"] == event and predicate(frame["data"]):
            return frame["data"]


# =============================================================================
# REST
# =============================================================================

class TestChatRoutes:
    """REST API /chat/*."""

    @pytest.fixture
    def repo(self) -> AsyncMock:
        return AsyncMock()

    @pytest.fixture
    def hub(self) -> ChatHub:
        return ChatHub()

    @pytest.fixture
    def client(self, repo: AsyncMock, hub: ChatHub):
        app.dependency_overrides[get_chat_service] = lambda: ChatService(repo, hub)
        app.dependency_overrides[get_chat_hub] = lambda: hub
        yield TestClient(app)
        app.dependency_overrides.clear()

    def test_send_message(self, client, repo, sample_message_row) -> None:
        repo.save_message.return_value = ChatMessageDTO(**sample_message_row)

        response = client.post("/chat/send", json={"senderId": 9, "receiverId": 10, "content": "Hello"})

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Message sent"
        assert body["data"]["senderId"] == 9
        assert body["data"]["isRead"] is False

    def test_send_empty_message_is_422(self, client, repo) -> None:
        response = client.post("/chat/send", json={"senderId": 9, "receiverId": 10, "content": ""})

        assert response.status_code == 422
        repo.save_message.assert_not_called()

    def test_get_messages(self, client, repo, sample_message_row) -> None:
        repo.get_messages_between.return_value = [ChatMessageDTO(**sample_message_row)]

        response = client.get("/chat/messages", params={"user1": 9, "user2": 10, "limit": 20})

        assert response.status_code == 200
        assert [m["content"] for m in response.json()] == ["Hello"]
        repo.get_messages_between.assert_awaited_once_with(9, 10, 20, 0)

    def test_chat_list(self, client, repo, sample_message_row) -> None:
        repo.get_conversations.return_value = [
            {**sample_message_row, "participant_id": 10, "unread_count": 1}
        ]

        response = client.get("/chat/list/9")

        assert response.status_code == 200
        chat = response.json()[0]
        assert chat["chatId"] == "10_9"
        assert chat["isOnline"] is False
        assert chat["unreadCount"] == 1
        assert chat["lastMessage"]["content"] == "Hello"

    def test_create_chat(self, client) -> None:
        response = client.post("/chat/create", json={"user1Id": 20, "user2Id": 10})

        assert response.status_code == 200
        assert response.json() == {"chatId": "10_20"}

    def test_create_chat_with_yourself(self, client) -> None:
        response = client.post("/chat/create", json={"user1Id": 10, "user2Id": 10})

        assert response.status_code == 400
        assert response.json()["detail"] == "Cannot create chat with yourself"

    def test_mark_read(self, client, repo) -> None:
        repo.mark_read.return_value = 2

        response = client.post("/chat/mark-read", json={"chatId": "10_20", "userId": 10})

        assert response.status_code == 200
        assert response.json() == {"message": "Messages marked as read", "updated": 2}

    def test_mark_read_not_participant(self, client) -> None:
        response = client.post("/chat/mark-read", json={"chatId": "10_20", "userId": 30})

        assert response.status_code == 400

    def test_unread_count(self, client, repo) -> None:
        repo.count_unread.return_value = 5

        response = client.get("/chat/unread-count/10")

        assert response.json() == {"count": 5}

    def test_online_status(self, client) -> None:
        response = client.get("/chat/online/10")

        assert response.json() == {"userId": 10, "isOnline": False}

    def test_stats(self, client) -> None:
        response = client.get("/stats")

        assert response.status_code == 200
        assert response.json()["activeConnections"] == 0

    def test_unhandled_error_is_500(self, repo, hub) -> None:
        repo.count_unread.side_effect = RuntimeError("db exploded")
        app.dependency_overrides[get_chat_service] = lambda: ChatService(repo, hub)
        try:
            client = TestClient(app, raise_server_exceptions=False)
            response = client.get("/chat/unread-count/10")
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 500
        assert response.json()["error_code"] == "internal_error"


# =============================================================================
# WEBSOCKET
# =============================================================================

class TestFrameHandling:
    """Разбор входящих кадров без транспорта."""

    @pytest.mark.asyncio
    async def test_malformed_json(self, hub, connect, flush) -> None:
        conn = await connect()

        await handle_frame(hub, conn, "{not json")
        await flush(conn)

        assert conn.websocket.events("error")[0]["message"] == "Malformed JSON"

    @pytest.mark.asyncio
    async def test_unknown_event(self, hub, connect, flush) -> None:
        conn = await connect()

        await handle_frame(hub, conn, '{"event": "dance", "data": {}}')
        await flush(conn)

        assert conn.websocket.events("error")[0]["message"] == "Unknown event: dance"

    @pytest.mark.asyncio
    async def test_invalid_payload_does_not_reach_hub(self, hub, connect, flush) -> None:
        conn = await connect()

        await handle_frame(hub, conn, '{"event": "user_online", "data": {"userId": "x", "userType": "pilot"}}')
        await flush(conn)

        error = conn.websocket.events("error")[0]
        assert error["message"] == "Invalid payload for user_online"
        assert {tuple(d["loc"]) for d in error["details"]} >= {("userId",), ("userType",)}
        assert hub.get_stats()["online_users"] == 0

    @pytest.mark.asyncio
    async def test_envelope_without_event(self, hub, connect, flush) -> None:
        conn = await connect()

        await handle_frame(hub, conn, '{"data": {}}')
        await flush(conn)

        assert conn.websocket.events("error")[0]["message"] == "Invalid envelope"

    @pytest.mark.asyncio
    async def test_dispatch(self, hub, connect, flush) -> None:
        conn = await connect()

        await handle_frame(hub, conn, '{"event": "user_online", "data": {"userId": 10, "userType": "caregiver"}}')
        await handle_frame(hub, conn, '{"event": "join_chat", "data": {"chatId": "10_20"}}')

        assert hub.lookup_by_user(10) == conn.connection_id
        assert hub.members_of("10_20") == {conn.connection_id}

        await handle_frame(hub, conn, '{"event": "leave_chat", "data": {"chatId": "10_20"}}')
        assert hub.members_of("10_20") == set()


class TestWebSocketEndpoint:
    """/ws/chat поверх TestClient с настоящим lifespan."""

    @pytest.fixture
    def client(self):
        with patch("evercare.services.chat_service.app.init_db", new_callable=AsyncMock), \
             patch("evercare.services.chat_service.app.close_db", new_callable=AsyncMock):
            with TestClient(app) as test_client:
                yield test_client

    def test_hello_between_caregiver_and_careseeker(self, client) -> None:
        with client.websocket_connect("/ws/chat") as ws1:
            ws1.send_json({"event": "user_online", "data": {"userId": 10, "userType": UserType.CAREGIVER.value}})
            with client.websocket_connect("/ws/chat") as ws2:
                ws2.send_json({"event": "user_online", "data": {"userId": 20, "userType": "careseeker"}})
                status = _receive_until(ws1, "user_status_change")
                assert status == {"userId": 20, "isOnline": True}

                ws2.send_json({"event": "join_chat", "data": {"chatId": "10_20"}})
                ws1.send_json({
                    "event": "send_message",
                    "data": {"senderId": 10, "receiverId": 20, "content": "Hello", "senderName": "Anna"},
                })

                message = _receive_until(ws2, "new_message")
                assert message["senderId"] == 10
                assert message["receiverId"] == 20
                assert message["content"] == "Hello"
                assert message["senderName"] == "Anna"

            offline = _receive_until(ws1, "user_status_change", lambda d: d["isOnline"] is False)
            assert offline == {"userId": 20, "isOnline": False}

    def test_error_event_for_bad_frame(self, client) -> None:
        with client.websocket_connect("/ws/chat") as ws:
            ws.send_text("hello?")
            frame = ws.receive_json()

        assert frame["event"] == "error"
        assert frame["data"]["message"] == "Malformed JSON"

    def test_health_reports_postgres(self, client) -> None:
        db = MagicMock()
        db.is_connected = False
        with patch("evercare.services.chat_service.app.get_db", return_value=db):
            response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["service"] == "chat_service"
        assert body["status"] == "degraded"
        assert body["dependencies"] == {"postgres": "unhealthy"}
