# evercare/services/chat_service/socket_handler.py
"""
Разбор входящих кадров WebSocket и вызов операций ChatHub.

Некорректный кадр не доходит до hub: отправителю уходит событие error.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ValidationError

from evercare.common.constants import ClientEvent, ServerEvent
from evercare.common.logger import log_warning
from evercare.services.chat_service.realtime.connection import ClientConnection
from evercare.services.chat_service.realtime.events import (
    Envelope,
    ErrorEvent,
    JoinChatPayload,
    LeaveChatPayload,
    SendMessagePayload,
    TypingPayload,
    UserOnlinePayload,
    dump_event,
)
from evercare.services.chat_service.realtime.hub import ChatHub

PAYLOAD_MODELS: dict[ClientEvent, type[BaseModel]] = {
    ClientEvent.USER_ONLINE: UserOnlinePayload,
    ClientEvent.JOIN_CHAT: JoinChatPayload,
    ClientEvent.LEAVE_CHAT: LeaveChatPayload,
    ClientEvent.SEND_MESSAGE: SendMessagePayload,
    ClientEvent.TYPING: TypingPayload,
}


def _validation_details(error: ValidationError) -> list[dict[str, Any]]:
    return [
        {"loc": [str(part) for part in item["loc"]], "msg": item["msg"]}
        for item in error.errors()
    ]


async def _reject(connection: ClientConnection, message: str, details: Any = None) -> None:
    connection.deliver(ServerEvent.ERROR.value, dump_event(ErrorEvent(message=message, details=details)))
    await log_warning(
        f"Отклонён кадр от {connection.connection_id}: {message}",
        logger_name="chat_service",
        extra={"details": details},
    )


async def handle_frame(hub: ChatHub, connection: ClientConnection, raw: str) -> None:
    """Обрабатывает один текстовый кадр клиента."""
    try:
        envelope = Envelope.model_validate(json.loads(raw))
    except json.JSONDecodeError:
        await _reject(connection, "Malformed JSON")
        return
    except ValidationError as e:
        await _reject(connection, "Invalid envelope", _validation_details(e))
        return

    try:
        event = ClientEvent(envelope.event)
    except ValueError:
        await _reject(connection, f"Unknown event: {envelope.event}")
        return

    try:
        payload = PAYLOAD_MODELS[event].model_validate(envelope.data)
    except ValidationError as e:
        await _reject(connection, f"Invalid payload for {event.value}", _validation_details(e))
        return

    cid = connection.connection_id

    match event:
        case ClientEvent.USER_ONLINE:
            await hub.announce_presence(cid, payload.user_id, payload.user_type)
        case ClientEvent.JOIN_CHAT:
            await hub.join_chat(cid, payload.chat_id)
        case ClientEvent.LEAVE_CHAT:
            await hub.leave_chat(cid, payload.chat_id)
        case ClientEvent.SEND_MESSAGE:
            await hub.send_message(
                payload.sender_id,
                payload.receiver_id,
                payload.content,
                payload.sender_name,
                payload.sender_type,
            )
        case ClientEvent.TYPING:
            await hub.set_typing(cid, payload.receiver_id, payload.chat_id, payload.is_typing)
