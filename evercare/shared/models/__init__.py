# evercare/shared/models/__init__.py
"""
DTO и Pydantic-модели сервисов.
"""

from evercare.shared.models.common import (
    CamelModel,
    PaginationParams,
    ErrorResponse,
    HealthStatus,
    MessageResponse,
)
from evercare.shared.models.enums import BookingStatus, NotificationType, PreferredGender, Urgency

__all__ = [
    "CamelModel",
    "PaginationParams",
    "ErrorResponse",
    "HealthStatus",
    "MessageResponse",
    "BookingStatus",
    "NotificationType",
    "PreferredGender",
    "Urgency",
]
