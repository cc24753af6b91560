from evercare.infra.database import DatabaseManager
from evercare.services.booking_service.repository import BookingRepository
from evercare.services.booking_service.service import BookingService


def get_database() -> DatabaseManager:
    return DatabaseManager()


def get_booking_repository() -> BookingRepository:
    db = get_database()
    return BookingRepository(db)


def get_booking_service() -> BookingService:
    repo = get_booking_repository()
    return BookingService(repo)
