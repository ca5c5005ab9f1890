from typing import List, Optional
from fastapi import APIRouter, Depends, Query

from clinic_booking.api.deps import (
    get_admission_controller,
    get_store,
    verify_booking_owner,
    verify_jwt,
)
from clinic_booking.api.schemas import BookingCreate, BookingResponse, InsertAck
from clinic_booking.database import Booking, ClinicStore
from clinic_booking.errors import Forbidden, NotFound
from clinic_booking.services import AdmissionController, BookingRequest

router = APIRouter()


@router.post("", response_model=InsertAck, response_model_exclude_none=True)
async def create_booking(
    booking_data: BookingCreate,
    controller: AdmissionController = Depends(get_admission_controller),
):
    """Create a new booking unless the patient already booked this treatment that day."""
    result = await controller.admit(
        BookingRequest(
            email=booking_data.email,
            appointment_date=booking_data.appointment_date,
            treatment=booking_data.treatment,
            slot=booking_data.slot,
            price=booking_data.price,
            patient_name=booking_data.patient_name,
            phone=booking_data.phone,
        )
    )

    if not result.accepted:
        return InsertAck(acknowledged=False, message=result.message)

    return InsertAck(acknowledged=True, inserted_id=result.booking.id)


@router.get("", response_model=List[BookingResponse])
async def get_patient_bookings(
    email: Optional[str] = Query(None, description="Patient email"),
    decoded_email: str = Depends(verify_jwt),
    store: ClinicStore = Depends(get_store),
):
    """Get the caller's bookings."""
    if email != decoded_email:
        raise Forbidden()

    return await store.bookings_for_patient(email)


@router.get("/{booking_id}", response_model=BookingResponse)
async def get_booking(booking_id: str, store: ClinicStore = Depends(get_store)):
    """Get booking by ID."""
    booking = await store.get_booking(booking_id)
    if not booking:
        raise NotFound("Booking not found")

    return booking


@router.patch("/{booking_id}/cancel", response_model=BookingResponse)
async def cancel_booking(
    booking: Booking = Depends(verify_booking_owner),
    controller: AdmissionController = Depends(get_admission_controller),
):
    """Cancel one of the caller's bookings."""
    return await controller.cancel(booking.id)
