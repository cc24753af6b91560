from typing import Optional, List

from evercare.infra.database import DatabaseManager
from evercare.shared.models.booking_dto import BookingDTO, CreateBookingRequest
from evercare.shared.models.enums import BookingStatus

BOOKING_COLUMNS = """
    booking_id, caregiver_id, careseeker_id, name, address, phone,
    start_date, end_date, expected_days, patient_description, payment_method,
    caregiver_name, caregiver_rate, status, created_at, updated_at
"""


class BookingRepository:
    def __init__(self, db: DatabaseManager):
        self.db = db

    async def create_booking(self, booking: CreateBookingRequest) -> BookingDTO:
        """Создаёт бронирование в статусе pending."""
        query = f"""
            INSERT INTO booking_schema.bookings (
                caregiver_id, careseeker_id, name, address, phone,
                start_date, end_date, expected_days, patient_description,
                payment_method, caregiver_name, caregiver_rate, status
            )
            VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10, $11, $12, $13)
            RETURNING {BOOKING_COLUMNS}
        """
        record = await self.db.fetchrow(
            query,
            booking.caregiver_id,
            booking.careseeker_id,
            booking.name,
            booking.address,
            booking.phone,
            booking.start_date,
            booking.end_date,
            booking.expected_days,
            booking.patient_description,
            booking.payment_method,
            booking.caregiver_name,
            booking.caregiver_rate,
            BookingStatus.PENDING.value,
        )
        return BookingDTO(**dict(record))

    async def get_by_caregiver(self, caregiver_id: int) -> List[BookingDTO]:
        """Бронирования caregiver по дате начала."""
        query = f"""
            SELECT {BOOKING_COLUMNS}
            FROM booking_schema.bookings
            WHERE caregiver_id = $1
            ORDER BY start_date ASC
        """
        records = await self.db.fetch(query, caregiver_id)
        return [BookingDTO(**dict(r)) for r in records]

    async def update_status(self, booking_id: int, status: BookingStatus) -> Optional[BookingDTO]:
        query = f"""
            UPDATE booking_schema.bookings
            SET status = $2, updated_at = NOW()
            WHERE booking_id = $1
            RETURNING {BOOKING_COLUMNS}
        """
        record = await self.db.fetchrow(query, booking_id, status.value)
        if record:
            return BookingDTO(**dict(record))
        return None

    async def get_all(self) -> List[BookingDTO]:
        query = f"""
            SELECT {BOOKING_COLUMNS}
            FROM booking_schema.bookings
            ORDER BY created_at DESC
        """
        records = await self.db.fetch(query)
        return [BookingDTO(**dict(r)) for r in records]
