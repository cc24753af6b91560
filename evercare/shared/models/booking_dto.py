from datetime import datetime
from typing import Optional, List

from pydantic import Field

from evercare.shared.models.common import CamelModel
from evercare.shared.models.enums import BookingStatus


class BookingDTO(CamelModel):
    booking_id: int
    caregiver_id: Optional[int] = None
    careseeker_id: Optional[int] = None
    name: str
    address: str
    phone: str
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    expected_days: str
    patient_description: str
    payment_method: str
    caregiver_name: Optional[str] = None
    caregiver_rate: Optional[str] = None
    status: BookingStatus = BookingStatus.PENDING
    created_at: datetime
    updated_at: datetime


class CreateBookingRequest(CamelModel):
    caregiver_id: int
    careseeker_id: int
    name: str = Field(min_length=1)
    address: str = Field(min_length=1)
    phone: str = Field(min_length=1)
    start_date: datetime
    end_date: datetime
    expected_days: str = Field(min_length=1)
    patient_description: str = Field(min_length=1)
    payment_method: str = Field(min_length=1)
    caregiver_name: Optional[str] = None
    caregiver_rate: Optional[str] = None


class UpdateBookingStatusRequest(CamelModel):
    status: BookingStatus


class BookingResponse(CamelModel):
    message: str
    booking: BookingDTO


class BookingListResponse(CamelModel):
    bookings: List[BookingDTO]
