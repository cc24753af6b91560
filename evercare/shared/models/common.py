# evercare/shared/models/common.py
"""
Общие модели для всех сервисов.
"""

from __future__ import annotations

from math import ceil
from typing import Any

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Базовая модель API.
    Наружу поля отдаются в camelCase, внутри и из БД принимаются в snake_case.
    """

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class PaginationParams(BaseModel):
    """Параметры пагинации."""

    page: int = Field(default=1, ge=1, description="Номер страницы")
    limit: int = Field(default=10, ge=1, le=100, description="Размер страницы")

    @property
    def offset(self) -> int:
        """Смещение для SQL-запроса."""
        return (self.page - 1) * self.limit


def total_pages(total: int, limit: int) -> int:
    """Количество страниц для total записей при размере страницы limit."""
    if limit <= 0:
        return 0
    return ceil(total / limit)


class MessageResponse(BaseModel):
    """Ответ с текстовым сообщением."""

    message: str


class ErrorResponse(BaseModel):
    """Стандартный ответ с ошибкой."""

    error_code: str
    message: str
    details: dict[str, Any] | None = None
    request_id: str | None = None


class HealthStatus(BaseModel):
    """Статус здоровья сервиса."""

    service: str
    status: str = "healthy"  # healthy, degraded, unhealthy
    version: str | None = None
    uptime_seconds: float | None = None
    dependencies: dict[str, str] = Field(default_factory=dict)
    # dependencies: {"postgres": "healthy"}
