from fastapi import APIRouter, Depends, HTTPException, status

from evercare.services.booking_service.dependencies import get_booking_service
from evercare.services.booking_service.service import BookingService
from evercare.shared.models.booking_dto import (
    BookingListResponse,
    BookingResponse,
    CreateBookingRequest,
    UpdateBookingStatusRequest,
)

router = APIRouter(prefix="/bookings", tags=["Bookings"])


@router.post("", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
async def create_booking(
    request: CreateBookingRequest,
    service: BookingService = Depends(get_booking_service)
):
    booking = await service.create_booking(request)
    return BookingResponse(message="Booking created successfully", booking=booking)


@router.get("/caregiver/{caregiver_id}", response_model=BookingListResponse)
async def get_caregiver_bookings(
    caregiver_id: int,
    service: BookingService = Depends(get_booking_service)
):
    bookings = await service.get_caregiver_bookings(caregiver_id)
    return BookingListResponse(bookings=bookings)


@router.put("/{booking_id}/status", response_model=BookingResponse)
async def update_booking_status(
    booking_id: int,
    request: UpdateBookingStatusRequest,
    service: BookingService = Depends(get_booking_service)
):
    booking = await service.update_status(booking_id, request.status)
    if not booking:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Booking not found")
    return BookingResponse(message="Booking status updated successfully", booking=booking)


@router.get("", response_model=BookingListResponse)
async def get_all_bookings(
    service: BookingService = Depends(get_booking_service)
):
    bookings = await service.get_all_bookings()
    return BookingListResponse(bookings=bookings)
