from evercare.infra.database import DatabaseManager
from evercare.services.jobposting_service.repository import NotificationRepository, PostRepository
from evercare.services.jobposting_service.service import JobPostingService, NotificationService


def get_database() -> DatabaseManager:
    return DatabaseManager()


def get_post_repository() -> PostRepository:
    return PostRepository(get_database())


def get_notification_repository() -> NotificationRepository:
    return NotificationRepository(get_database())


def get_jobposting_service() -> JobPostingService:
    return JobPostingService(get_post_repository())


def get_notification_service() -> NotificationService:
    return NotificationService(get_notification_repository(), get_post_repository())
