#!/usr/bin/env python3
# entrypoint_chat_service.py
"""
Точка входа для Chat Service.
"""

import asyncio
import sys
from pathlib import Path

# Добавляем корневую директорию проекта в путь
project_root = Path(__file__).parent.parent.resolve()
sys.path.insert(0, str(project_root))

import uvicorn

from evercare.config import settings
from evercare.common.logger import log_info
from evercare.common.constants import TypeMsg


async def main() -> None:
    """Запуск Chat Service."""
    await log_info(
        f"Запуск Chat Service на порту {settings.deployment.CHAT_SERVICE_PORT}",
        type_msg=TypeMsg.INFO,
    )

    config = uvicorn.Config(
        "evercare.services.chat_service.app:app",
        host="0.0.0.0",
        port=settings.deployment.CHAT_SERVICE_PORT,
        log_level="debug" if settings.system.DEBUG else "info",
    )

    server = uvicorn.Server(config)
    await server.serve()


if __name__ == "__main__":
    asyncio.run(main())
