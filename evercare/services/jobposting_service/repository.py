from typing import Optional, List, Iterable

from evercare.infra.database import DatabaseManager, parse_affected_rows
from evercare.shared.models.post_dto import CreatePostRequest, NotificationDTO, PostDTO
from evercare.shared.models.enums import NotificationType

POST_COLUMNS = """
    post_id, careseeker_id, caregiver_id, caregiver_name, age,
    care_type, duration, district, urgency, description, created_at
"""
NOTIFICATION_COLUMNS = "notification_id, careseeker_id, caregiver_id, post_id, type, message, created_at"


class PostRepository:
    def __init__(self, db: DatabaseManager):
        self.db = db

    async def create_post(self, post: CreatePostRequest) -> PostDTO:
        query = f"""
            INSERT INTO jobposting_schema.posts (
                careseeker_id, caregiver_id, caregiver_name, age,
                care_type, duration, district, urgency, description
            )
            VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9)
            RETURNING {POST_COLUMNS}
        """
        record = await self.db.fetchrow(
            query,
            post.careseeker_id,
            post.caregiver_id,
            post.caregiver_name,
            post.age,
            post.care_type,
            post.duration,
            post.district,
            post.urgency,
            post.description,
        )
        return PostDTO(**dict(record))

    async def get_by_id(self, post_id: int) -> Optional[PostDTO]:
        query = f"SELECT {POST_COLUMNS} FROM jobposting_schema.posts WHERE post_id = $1"
        record = await self.db.fetchrow(query, post_id)
        if record:
            return PostDTO(**dict(record))
        return None

    async def get_by_ids(self, post_ids: Iterable[int]) -> List[PostDTO]:
        ids = list(set(post_ids))
        if not ids:
            return []
        query = f"SELECT {POST_COLUMNS} FROM jobposting_schema.posts WHERE post_id = ANY($1::int[])"
        records = await self.db.fetch(query, ids)
        return [PostDTO(**dict(r)) for r in records]

    async def get_all(self) -> List[PostDTO]:
        query = f"SELECT {POST_COLUMNS} FROM jobposting_schema.posts ORDER BY post_id"
        records = await self.db.fetch(query)
        return [PostDTO(**dict(r)) for r in records]

    async def get_by_careseeker(self, careseeker_id: int) -> List[PostDTO]:
        query = f"""
            SELECT {POST_COLUMNS}
            FROM jobposting_schema.posts
            WHERE careseeker_id = $1
            ORDER BY post_id
        """
        records = await self.db.fetch(query, careseeker_id)
        return [PostDTO(**dict(r)) for r in records]

    async def update_description(self, post_id: int, description: Optional[str]) -> Optional[PostDTO]:
        """Пустое или отсутствующее описание оставляет объявление без изменений."""
        query = f"""
            UPDATE jobposting_schema.posts
            SET description = COALESCE(NULLIF($2, ''), description)
            WHERE post_id = $1
            RETURNING {POST_COLUMNS}
        """
        record = await self.db.fetchrow(query, post_id, description)
        if record:
            return PostDTO(**dict(record))
        return None

    async def delete_post(self, post_id: int) -> bool:
        status = await self.db.execute("DELETE FROM jobposting_schema.posts WHERE post_id = $1", post_id)
        return parse_affected_rows(status) > 0


class NotificationRepository:
    def __init__(self, db: DatabaseManager):
        self.db = db

    async def create_notification(
        self,
        post_id: int,
        caregiver_id: int,
        careseeker_id: int,
        type: NotificationType,
        message: str,
    ) -> NotificationDTO:
        query = f"""
            INSERT INTO jobposting_schema.notifications (post_id, caregiver_id, careseeker_id, type, message)
            VALUES ($1, $2, $3, $4, $5)
            RETURNING {NOTIFICATION_COLUMNS}
        """
        record = await self.db.fetchrow(query, post_id, caregiver_id, careseeker_id, type.value, message)
        return NotificationDTO(**dict(record))

    async def get_by_careseeker(self, careseeker_id: int) -> List[NotificationDTO]:
        query = f"""
            SELECT {NOTIFICATION_COLUMNS}
            FROM jobposting_schema.notifications
            WHERE careseeker_id = $1
            ORDER BY created_at DESC, notification_id DESC
        """
        records = await self.db.fetch(query, careseeker_id)
        return [NotificationDTO(**dict(r)) for r in records]
