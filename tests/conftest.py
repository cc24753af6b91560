# tests/conftest.py
"""
Общие фикстуры и настройки для тестов.
"""

from __future__ import annotations

import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock

import pytest

# Устанавливаем переменные окружения перед импортом модулей
os.environ.setdefault("DB_PASSWORD", "test_password")


# =============================================================================
# ФИКСТУРЫ КОНФИГУРАЦИИ
# =============================================================================

@pytest.fixture(scope="session")
def project_root() -> Path:
    """Корневая директория проекта."""
    return Path(__file__).parent.parent


@pytest.fixture(scope="session")
def config_path(project_root: Path) -> Path:
    """Путь к файлу конфигурации."""
    return project_root / "config" / "config.json"


# =============================================================================
# ФИКСТУРЫ ИНФРАСТРУКТУРЫ (МОКИ)
# =============================================================================

@pytest.fixture
def mock_db() -> AsyncMock:
    """Мок менеджера базы данных."""
    db = AsyncMock()
    db.fetchrow = AsyncMock(return_value=None)
    db.fetch = AsyncMock(return_value=[])
    db.execute = AsyncMock(return_value="INSERT 0 1")
    db.fetchval = AsyncMock(return_value=None)
    return db


# =============================================================================
# ФИКСТУРЫ МОДЕЛЕЙ
# =============================================================================

@pytest.fixture
def now() -> datetime:
    return datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def sample_message_row(now: datetime) -> dict[str, Any]:
    """Строка chat_schema.messages."""
    return {
        "id": 1,
        "sender_id": 9,
        "receiver_id": 10,
        "content": "Hello",
        "timestamp": now,
        "is_read": False,
    }


@pytest.fixture
def sample_booking_row(now: datetime) -> dict[str, Any]:
    """Строка booking_schema.bookings."""
    return {
        "booking_id": 7,
        "caregiver_id": 3,
        "careseeker_id": 4,
        "name": "Maria Lopez",
        "address": "12 Oak Street",
        "phone": "+1 555 0100",
        "start_date": datetime(2025, 3, 10, 9, 0, tzinfo=timezone.utc),
        "end_date": datetime(2025, 3, 20, 17, 0, tzinfo=timezone.utc),
        "expected_days": "10",
        "patient_description": "Post-surgery recovery",
        "payment_method": "cash",
        "caregiver_name": "Anna",
        "caregiver_rate": "25/h",
        "status": "pending",
        "created_at": now,
        "updated_at": now,
    }


@pytest.fixture
def sample_review_row(now: datetime) -> dict[str, Any]:
    """Строка review_schema.reviews."""
    return {
        "review_id": 11,
        "caregiver_id": 3,
        "careseeker_id": 4,
        "rating": 5,
        "comment": "Great",
        "created_at": now,
        "updated_at": now,
    }


@pytest.fixture
def sample_post_row(now: datetime) -> dict[str, Any]:
    """Строка jobposting_schema.posts."""
    return {
        "post_id": 21,
        "careseeker_id": 4,
        "caregiver_id": None,
        "caregiver_name": None,
        "age": None,
        "care_type": "Elderly",
        "duration": "3 months",
        "district": "North",
        "urgency": "High",
        "description": "Need help with daily routines",
        "created_at": now,
    }


@pytest.fixture
def sample_notification_row(now: datetime) -> dict[str, Any]:
    """Строка jobposting_schema.notifications."""
    return {
        "notification_id": 31,
        "careseeker_id": 4,
        "caregiver_id": 3,
        "post_id": 21,
        "type": "interest",
        "message": "A caregiver is interested in your post!",
        "created_at": now,
    }


@pytest.fixture
def sample_caregiver_profile_row(now: datetime) -> dict[str, Any]:
    """Строка profile_schema.caregiver_profiles."""
    return {
        "profile_id": 41,
        "caregiver_id": 3,
        "display_name": "Anna K.",
        "age": 34,
        "experience_years": 8,
        "specialization": "Elderly care",
        "description": "Certified nurse assistant",
        "profile_photo": None,
        "average_rating": 4.5,
        "reviews_count": 12,
        "clients_count": 9,
        "completed_jobs": 20,
        "created_at": now,
        "updated_at": now,
    }


@pytest.fixture
def sample_careseeker_profile_row(now: datetime) -> dict[str, Any]:
    """Строка profile_schema.careseeker_profiles."""
    return {
        "profile_id": 51,
        "careseeker_id": 4,
        "about": "Looking after my mother",
        "care_type": "Elderly",
        "care_experience": None,
        "budget_range": "$20-30/h",
        "location": "North",
        "urgency": "high",
        "health_conditions": ["diabetes"],
        "care_requirements": None,
        "care_tasks_needed": ["meals", "medication"],
        "preferred_gender": "female",
        "languages": ["en", "si"],
        "overall_rating": 0.0,
        "total_reviews": 0,
        "created_at": now,
        "updated_at": now,
    }
