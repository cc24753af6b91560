# evercare/shared/web.py
"""
Общая обвязка FastAPI-приложений сервисов: CORS, обработчик ошибок, health.
"""

from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from evercare.common.logger import log_error
from evercare.config import settings
from evercare.infra.database import DatabaseManager
from evercare.shared.models.common import ErrorResponse, HealthStatus


def add_cors(app: FastAPI) -> None:
    """Подключает CORS с источниками из конфигурации."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.ALLOWED_ORIGINS,
        allow_credentials=settings.cors.ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def install_error_handlers(app: FastAPI, service_name: str) -> None:
    """
    Необработанные исключения логируются с трейсбеком
    и возвращаются клиенту как ErrorResponse с кодом 500.
    """

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        await log_error(
            f"Необработанная ошибка {request.method} {request.url.path}: {exc}",
            logger_name=service_name,
            exc_info=True,
        )
        body = ErrorResponse(error_code="internal_error", message="Internal server error")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=body.model_dump(),
        )


async def build_health(service_name: str, db: DatabaseManager) -> HealthStatus:
    """Проверка здоровья сервиса и его PostgreSQL."""
    deps: dict[str, str] = {}

    if not db.is_connected:
        deps["postgres"] = "unhealthy"
    elif await db.health_check():
        deps["postgres"] = "healthy"
    else:
        deps["postgres"] = "unhealthy"

    overall = "healthy" if all(v == "healthy" for v in deps.values()) else "degraded"

    return HealthStatus(
        service=service_name,
        status=overall,
        version=settings.system.VERSION,
        dependencies=deps,
    )
