import pytest
from unittest.mock import AsyncMock, MagicMock

from evercare.services.chat_service.repository import ChatRepository
from evercare.services.chat_service.service import ChatService
from evercare.shared.models.chat_dto import ChatMessageDTO, SendMessageRequest


@pytest.fixture
def mock_repo():
    return AsyncMock()


@pytest.fixture
def mock_hub():
    hub = MagicMock()
    hub.is_online.return_value = False
    return hub


@pytest.fixture
def service(mock_repo, mock_hub):
    return ChatService(mock_repo, mock_hub, default_limit=50, max_limit=200)


@pytest.mark.asyncio
async def test_send_message_persists(service, mock_repo, sample_message_row):
    mock_repo.save_message.return_value = ChatMessageDTO(**sample_message_row)

    message = await service.send_message(SendMessageRequest(sender_id=9, receiver_id=10, content="Hello"))

    mock_repo.save_message.assert_awaited_once_with(9, 10, "Hello")
    assert message.id == 1


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "limit, expected",
    [(None, 50), (10, 10), (5000, 200), (0, 1)],
)
async def test_get_messages_clamps_limit(service, mock_repo, limit, expected):
    mock_repo.get_messages_between.return_value = []

    await service.get_messages(9, 10, limit=limit, offset=-5)

    mock_repo.get_messages_between.assert_awaited_once_with(9, 10, expected, 0)


@pytest.mark.asyncio
async def test_get_chat_list_uses_live_presence(service, mock_repo, mock_hub, sample_message_row):
    mock_repo.get_conversations.return_value = [
        {**sample_message_row, "participant_id": 10, "unread_count": 2},
    ]
    mock_hub.is_online.return_value = True

    chats = await service.get_chat_list(9)

    assert len(chats) == 1
    chat = chats[0]
    assert chat.chat_id == "10_9"
    assert chat.participant_id == 10
    assert chat.is_online is True
    assert chat.unread_count == 2
    assert chat.last_message.content == "Hello"
    assert chat.updated_at == sample_message_row["timestamp"]
    mock_hub.is_online.assert_called_once_with(10)


def test_create_chat_is_symmetric(service):
    assert service.create_chat(20, 10) == service.create_chat(10, 20) == "10_20"


def test_create_chat_with_yourself(service):
    with pytest.raises(ValueError, match="Cannot create chat with yourself"):
        service.create_chat(10, 10)


@pytest.mark.asyncio
async def test_mark_read_marks_incoming(service, mock_repo):
    mock_repo.mark_read.return_value = 3

    updated = await service.mark_read("10_20", 20)

    assert updated == 3
    mock_repo.mark_read.assert_awaited_once_with(20, 10)


@pytest.mark.asyncio
@pytest.mark.parametrize("chat_id, user_id", [("garbage", 10), ("10_20", 30)])
async def test_mark_read_rejects(service, mock_repo, chat_id, user_id):
    with pytest.raises(ValueError):
        await service.mark_read(chat_id, user_id)
    mock_repo.mark_read.assert_not_called()


@pytest.mark.asyncio
async def test_unread_count_and_online(service, mock_repo, mock_hub):
    mock_repo.count_unread.return_value = 4
    mock_hub.is_online.return_value = True

    assert await service.get_unread_count(10) == 4
    assert service.is_online(10) is True


class TestChatRepository:
    """SQL-слой сообщений поверх DatabaseManager."""

    @pytest.mark.asyncio
    async def test_save_message(self, mock_db, sample_message_row):
        mock_db.fetchrow.return_value = sample_message_row
        repo = ChatRepository(mock_db)

        message = await repo.save_message(9, 10, "Hello")

        assert message.sender_id == 9
        args = mock_db.fetchrow.await_args.args
        assert "INSERT INTO chat_schema.messages" in args[0]
        assert args[1:] == (9, 10, "Hello")

    @pytest.mark.asyncio
    async def test_get_messages_between(self, mock_db, sample_message_row):
        mock_db.fetch.return_value = [sample_message_row]
        repo = ChatRepository(mock_db)

        messages = await repo.get_messages_between(9, 10, 50, 0)

        assert [m.id for m in messages] == [1]
        query = mock_db.fetch.await_args.args[0]
        assert "ORDER BY timestamp ASC" in query

    @pytest.mark.asyncio
    async def test_mark_read_parses_status(self, mock_db):
        mock_db.execute.return_value = "UPDATE 2"
        repo = ChatRepository(mock_db)

        assert await repo.mark_read(20, 10) == 2
        assert mock_db.execute.await_args.args[1:] == (20, 10)

    @pytest.mark.asyncio
    async def test_count_unread_defaults_to_zero(self, mock_db):
        repo = ChatRepository(mock_db)

        assert await repo.count_unread(10) == 0
