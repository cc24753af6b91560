#!/usr/bin/env python3
# entrypoint_review_service.py
"""
Точка входа для Review Service.
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
    """Запуск Review Service."""
    await log_info(
        f"Запуск Review Service на порту {settings.deployment.REVIEW_SERVICE_PORT}",
        type_msg=TypeMsg.INFO,
    )

    config = uvicorn.Config(
        "evercare.services.review_service.app:app",
        host="0.0.0.0",
        port=settings.deployment.REVIEW_SERVICE_PORT,
        log_level="debug" if settings.system.DEBUG else "info",
    )

    server = uvicorn.Server(config)
    await server.serve()


if __name__ == "__main__":
    asyncio.run(main())
