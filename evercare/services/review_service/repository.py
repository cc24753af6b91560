from typing import Optional, List, Tuple

from evercare.infra.database import DatabaseManager, parse_affected_rows
from evercare.shared.models.review_dto import ReviewDTO

REVIEW_COLUMNS = "review_id, caregiver_id, careseeker_id, rating, comment, created_at, updated_at"


class ReviewRepository:
    def __init__(self, db: DatabaseManager):
        self.db = db

    async def get_by_pair(self, caregiver_id: int, careseeker_id: int) -> Optional[ReviewDTO]:
        query = f"""
            SELECT {REVIEW_COLUMNS}
            FROM review_schema.reviews
            WHERE caregiver_id = $1 AND careseeker_id = $2
        """
        record = await self.db.fetchrow(query, caregiver_id, careseeker_id)
        if record:
            return ReviewDTO(**dict(record))
        return None

    async def upsert_review(
        self,
        caregiver_id: int,
        careseeker_id: int,
        rating: int,
        comment: str,
    ) -> Tuple[ReviewDTO, bool]:
        """
        Создаёт отзыв пары или обновляет существующий одним запросом.

        Returns:
            (отзыв, True если строка вставлена)
        """
        query = f"""
            INSERT INTO review_schema.reviews (caregiver_id, careseeker_id, rating, comment)
            VALUES ($1, $2, $3, $4)
            ON CONFLICT (caregiver_id, careseeker_id) DO UPDATE
            SET rating = EXCLUDED.rating, comment = EXCLUDED.comment, updated_at = NOW()
            RETURNING {REVIEW_COLUMNS}, (xmax = 0) AS created
        """
        record = await self.db.fetchrow(query, caregiver_id, careseeker_id, rating, comment)
        row = dict(record)
        created = row.pop("created")
        return ReviewDTO(**row), bool(created)

    async def get_by_caregiver(self, caregiver_id: int, limit: int, offset: int) -> Tuple[List[ReviewDTO], int]:
        """Страница отзывов (новые первыми) и общее количество."""
        query = f"""
            SELECT {REVIEW_COLUMNS}
            FROM review_schema.reviews
            WHERE caregiver_id = $1
            ORDER BY created_at DESC, review_id DESC
            LIMIT $2 OFFSET $3
        """
        count_query = "SELECT COUNT(*) FROM review_schema.reviews WHERE caregiver_id = $1"

        records = await self.db.fetch(query, caregiver_id, limit, offset)
        total = await self.db.fetchval(count_query, caregiver_id)
        return [ReviewDTO(**dict(r)) for r in records], total or 0

    async def get_rating(self, caregiver_id: int) -> Tuple[Optional[float], int]:
        """Средняя оценка (None если отзывов нет) и количество отзывов."""
        query = """
            SELECT AVG(rating)::float AS average_rating, COUNT(review_id) AS total_reviews
            FROM review_schema.reviews
            WHERE caregiver_id = $1
        """
        record = await self.db.fetchrow(query, caregiver_id)
        if not record:
            return None, 0
        return record["average_rating"], record["total_reviews"] or 0

    async def delete_by_pair(self, caregiver_id: int, careseeker_id: int) -> bool:
        query = """
            DELETE FROM review_schema.reviews
            WHERE caregiver_id = $1 AND careseeker_id = $2
        """
        status = await self.db.execute(query, caregiver_id, careseeker_id)
        return parse_affected_rows(status) > 0
