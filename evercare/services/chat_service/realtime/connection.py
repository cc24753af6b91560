# evercare/services/chat_service/realtime/connection.py
"""
Одно живое WebSocket-соединение.

Отправка идёт через ограниченную очередь и отдельную задачу-писателя,
поэтому медленный клиент не блокирует рассылку остальным.
"""

from __future__ import annotations

import asyncio
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from fastapi import WebSocket

from evercare.common.constants import UserType
from evercare.common.logger import log_debug


def _new_connection_id() -> str:
    return uuid.uuid4().hex


@dataclass(eq=False)
class ClientConnection:
    """Информация о соединении."""
    websocket: WebSocket
    queue_size: int = 256
    connection_id: str = field(default_factory=_new_connection_id)
    user_id: int | None = None  # заполняется после user_online
    user_type: UserType | None = None
    connected_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    closed: bool = field(default=False, init=False)  # сокет мёртв, события больше не ставятся
    _outbox: asyncio.Queue = field(init=False, repr=False)
    _writer: asyncio.Task | None = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        self._outbox = asyncio.Queue(maxsize=self.queue_size)

    @property
    def pending(self) -> int:
        """Количество событий, ожидающих отправки."""
        return self._outbox.qsize()

    def deliver(self, event: str, data: dict[str, Any]) -> bool:
        """
        Ставит событие в очередь отправки, не дожидаясь клиента.

        Returns:
            False если очередь переполнена и событие отброшено;
            у закрытого соединения событие молча пропускается
        """
        if self.closed:
            return True
        try:
            self._outbox.put_nowait({"event": event, "data": data})
        except asyncio.QueueFull:
            return False
        return True

    def start_writer(self) -> None:
        """Запускает задачу, которая отправляет события из очереди в сокет."""
        if self._writer is None:
            self._writer = asyncio.create_task(
                self._write_loop(), name=f"ws-writer-{self.connection_id}"
            )

    async def _write_loop(self) -> None:
        while True:
            frame = await self._outbox.get()
            try:
                await self.websocket.send_json(frame)
            except Exception as e:
                # Сокет уже закрыт: очистку выполнит обработчик отключения
                self.closed = True
                await log_debug(
                    f"Соединение {self.connection_id} закрыто, отправка остановлена: {e!r}",
                    logger_name="chat_service",
                )
                return
            finally:
                self._outbox.task_done()
                if self.closed:
                    self._discard_pending()

    def _discard_pending(self) -> None:
        while True:
            try:
                self._outbox.get_nowait()
            except asyncio.QueueEmpty:
                return
            self._outbox.task_done()

    async def flush(self) -> None:
        """Ждёт, пока писатель отправит всё, что уже стоит в очереди."""
        await self._outbox.join()

    async def close(self) -> None:
        """Останавливает задачу-писателя."""
        self.closed = True
        if self._writer is None:
            return
        writer, self._writer = self._writer, None
        if not writer.done():
            writer.cancel()
        try:
            await writer
        except asyncio.CancelledError:
            pass
