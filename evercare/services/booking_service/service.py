from typing import Optional, List

from evercare.common.logger import log_info
from evercare.common.constants import TypeMsg
from evercare.services.booking_service.repository import BookingRepository
from evercare.shared.models.booking_dto import BookingDTO, CreateBookingRequest
from evercare.shared.models.enums import BookingStatus


class BookingService:
    def __init__(self, repository: BookingRepository):
        self.repository = repository

    async def create_booking(self, request: CreateBookingRequest) -> BookingDTO:
        booking = await self.repository.create_booking(request)
        await log_info(
            f"Бронирование {booking.booking_id}: careseeker {request.careseeker_id} -> caregiver {request.caregiver_id}",
            type_msg=TypeMsg.INFO,
            logger_name="booking_service",
        )
        return booking

    async def get_caregiver_bookings(self, caregiver_id: int) -> List[BookingDTO]:
        return await self.repository.get_by_caregiver(caregiver_id)

    async def update_status(self, booking_id: int, status: BookingStatus) -> Optional[BookingDTO]:
        """Меняет статус (accept/reject/...). None если бронирование не найдено."""
        booking = await self.repository.update_status(booking_id, status)
        if booking:
            await log_info(
                f"Бронирование {booking_id} -> {status}",
                type_msg=TypeMsg.INFO,
                logger_name="booking_service",
            )
        return booking

    async def get_all_bookings(self) -> List[BookingDTO]:
        return await self.repository.get_all()
