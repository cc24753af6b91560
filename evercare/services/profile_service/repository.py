from typing import Any, Dict, Optional, List, Tuple

from evercare.infra.database import DatabaseManager, parse_affected_rows
from evercare.shared.models.profile_dto import (
    CaregiverProfileDTO,
    CaregiverProfileFields,
    CareseekerProfileDTO,
    CareseekerProfileFields,
)

CAREGIVER_COLUMNS = """
    profile_id, caregiver_id, display_name, age, experience_years, specialization,
    description, profile_photo, average_rating::float AS average_rating,
    reviews_count, clients_count, completed_jobs, created_at, updated_at
"""
CARESEEKER_COLUMNS = """
    profile_id, careseeker_id, about, care_type, care_experience, budget_range,
    location, urgency, health_conditions, care_requirements, care_tasks_needed,
    preferred_gender, languages, overall_rating::float AS overall_rating,
    total_reviews, created_at, updated_at
"""

# Имена колонок совпадают с полями моделей; только они попадают в SQL
CAREGIVER_FIELDS = tuple(CaregiverProfileFields.model_fields)
CARESEEKER_FIELDS = tuple(CareseekerProfileFields.model_fields)


class CaregiverProfileRepository:
    def __init__(self, db: DatabaseManager):
        self.db = db

    async def get_by_caregiver(self, caregiver_id: int) -> Optional[CaregiverProfileDTO]:
        query = f"""
            SELECT {CAREGIVER_COLUMNS}
            FROM profile_schema.caregiver_profiles
            WHERE caregiver_id = $1
        """
        record = await self.db.fetchrow(query, caregiver_id)
        if record:
            return CaregiverProfileDTO(**dict(record))
        return None

    async def get_page(self, limit: int, offset: int) -> Tuple[List[CaregiverProfileDTO], int]:
        """Страница профилей (новые первыми) и общее количество."""
        query = f"""
            SELECT {CAREGIVER_COLUMNS}
            FROM profile_schema.caregiver_profiles
            ORDER BY created_at DESC, profile_id DESC
            LIMIT $1 OFFSET $2
        """
        records = await self.db.fetch(query, limit, offset)
        total = await self.db.fetchval("SELECT COUNT(*) FROM profile_schema.caregiver_profiles")
        return [CaregiverProfileDTO(**dict(r)) for r in records], total or 0

    async def create_profile(self, caregiver_id: int, fields: Dict[str, Any]) -> Optional[CaregiverProfileDTO]:
        """
        Создаёт профиль. Непереданные счётчики берут значения по умолчанию из схемы.

        Returns:
            None если профиль этого caregiver уже существует
        """
        columns = ["caregiver_id"]
        values: List[Any] = [caregiver_id]
        for key, value in fields.items():
            if key in CAREGIVER_FIELDS:
                columns.append(key)
                values.append(value)

        placeholders = ", ".join(f"${i}" for i in range(1, len(values) + 1))
        query = f"""
            INSERT INTO profile_schema.caregiver_profiles ({", ".join(columns)})
            VALUES ({placeholders})
            ON CONFLICT (caregiver_id) DO NOTHING
            RETURNING {CAREGIVER_COLUMNS}
        """
        record = await self.db.fetchrow(query, *values)
        if record:
            return CaregiverProfileDTO(**dict(record))
        return None

    async def update_profile(self, caregiver_id: int, updates: Dict[str, Any]) -> Optional[CaregiverProfileDTO]:
        """Обновляет только переданные поля."""
        set_parts = []
        values: List[Any] = []
        idx = 1

        for key, value in updates.items():
            if key in CAREGIVER_FIELDS:
                set_parts.append(f"{key} = ${idx}")
                values.append(value)
                idx += 1

        if not set_parts:
            return await self.get_by_caregiver(caregiver_id)

        set_parts.append("updated_at = NOW()")
        values.append(caregiver_id)

        query = f"""
            UPDATE profile_schema.caregiver_profiles
            SET {", ".join(set_parts)}
            WHERE caregiver_id = ${idx}
            RETURNING {CAREGIVER_COLUMNS}
        """
        record = await self.db.fetchrow(query, *values)
        if record:
            return CaregiverProfileDTO(**dict(record))
        return None

    async def delete_profile(self, caregiver_id: int) -> bool:
        status = await self.db.execute(
            "DELETE FROM profile_schema.caregiver_profiles WHERE caregiver_id = $1",
            caregiver_id,
        )
        return parse_affected_rows(status) > 0


class CareseekerProfileRepository:
    def __init__(self, db: DatabaseManager):
        self.db = db

    async def get_by_careseeker(self, careseeker_id: int) -> Optional[CareseekerProfileDTO]:
        query = f"""
            SELECT {CARESEEKER_COLUMNS}
            FROM profile_schema.careseeker_profiles
            WHERE careseeker_id = $1
        """
        record = await self.db.fetchrow(query, careseeker_id)
        if record:
            return CareseekerProfileDTO(**dict(record))
        return None

    async def upsert_profile(
        self,
        careseeker_id: int,
        fields: Dict[str, Any],
    ) -> Tuple[CareseekerProfileDTO, bool]:
        """
        Создаёт профиль или обновляет существующий одним запросом.
        NULL в новых данных оставляет прежнее значение колонки.

        Returns:
            (профиль, True если строка вставлена)
        """
        columns = ", ".join(CARESEEKER_FIELDS)
        placeholders = ", ".join(f"${i}" for i in range(2, len(CARESEEKER_FIELDS) + 2))
        set_parts = ", ".join(f"{name} = COALESCE(EXCLUDED.{name}, p.{name})" for name in CARESEEKER_FIELDS)

        query = f"""
            INSERT INTO profile_schema.careseeker_profiles AS p (careseeker_id, {columns})
            VALUES ($1, {placeholders})
            ON CONFLICT (careseeker_id) DO UPDATE
            SET {set_parts}, updated_at = NOW()
            RETURNING {CARESEEKER_COLUMNS}, (xmax = 0) AS created
        """
        values = [fields.get(name) for name in CARESEEKER_FIELDS]
        record = await self.db.fetchrow(query, careseeker_id, *values)
        row = dict(record)
        created = row.pop("created")
        return CareseekerProfileDTO(**row), bool(created)
