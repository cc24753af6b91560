from evercare.infra.database import DatabaseManager
from evercare.services.review_service.repository import ReviewRepository
from evercare.services.review_service.service import ReviewService


def get_database() -> DatabaseManager:
    return DatabaseManager()


def get_review_repository() -> ReviewRepository:
    db = get_database()
    return ReviewRepository(db)


def get_review_service() -> ReviewService:
    repo = get_review_repository()
    return ReviewService(repo)
