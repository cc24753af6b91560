# evercare/services/chat_service/app.py
"""
FastAPI приложение Chat Service.

WebSocket endpoints:
- /ws/chat: realtime: user_online, join_chat, leave_chat, send_message, typing

REST endpoints:
- /chat/*: история сообщений, список диалогов, непрочитанные
- GET /health: проверка здоровья
- GET /stats: статистика соединений
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import Depends, FastAPI, WebSocket, WebSocketDisconnect

from evercare.common.logger import log_info, setup_logging
from evercare.common.constants import TypeMsg
from evercare.config import settings
from evercare.infra.database import close_db, get_db, init_db
from evercare.services.chat_service.dependencies import get_chat_hub
from evercare.services.chat_service.realtime.hub import ChatHub
from evercare.services.chat_service.routes import router
from evercare.services.chat_service.socket_handler import handle_frame
from evercare.shared.models.chat_dto import ChatStatsResponse
from evercare.shared.models.common import HealthStatus
from evercare.shared.web import add_cors, build_health, install_error_handlers

SERVICE_NAME = "chat_service"


# === LIFESPAN ===

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Жизненный цикл приложения."""
    setup_logging()
    await log_info("Chat Service запускается...", type_msg=TypeMsg.INFO)

    app.state.chat_hub = ChatHub(
        queue_size=settings.chat.SEND_QUEUE_SIZE,
        separator=settings.chat.CHAT_ID_SEPARATOR,
    )
    await init_db()

    yield

    await app.state.chat_hub.close()
    await close_db()
    await log_info("Chat Service остановлен", type_msg=TypeMsg.INFO)


# === APP ===

app = FastAPI(
    title="Chat Service",
    description="Сообщения между caregiver и careseeker, presence и typing в реальном времени.",
    version=settings.system.VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

add_cors(app)
install_error_handlers(app, SERVICE_NAME)
app.include_router(router)


# === HEALTH CHECK ===

@app.get("/health", response_model=HealthStatus, tags=["Health"])
async def health_check() -> HealthStatus:
    """Проверка здоровья сервиса."""
    return await build_health(SERVICE_NAME, get_db())


# === STATS ===

@app.get("/stats", response_model=ChatStatsResponse, tags=["Stats"])
async def get_stats(hub: ChatHub = Depends(get_chat_hub)) -> ChatStatsResponse:
    """Получить статистику соединений."""
    return ChatStatsResponse(**hub.get_stats())


# === WEBSOCKET ===

@app.websocket("/ws/chat")
async def websocket_chat(websocket: WebSocket) -> None:
    """
    Кадры в обе стороны: {"event": "...", "data": {...}}.

    Входящие события:
    - user_online {userId, userType}
    - join_chat / leave_chat {chatId}
    - send_message {senderId, receiverId, content, senderName, senderType}
    - typing {receiverId, isTyping, chatId}
    """
    hub: ChatHub = websocket.app.state.chat_hub

    await websocket.accept()
    connection = await hub.register(websocket)
    connection.start_writer()

    try:
        while True:
            raw = await websocket.receive_text()
            await handle_frame(hub, connection, raw)
    except WebSocketDisconnect:
        pass
    finally:
        await hub.disconnect(connection.connection_id)
