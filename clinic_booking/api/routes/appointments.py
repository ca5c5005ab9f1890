from typing import List, Optional
from fastapi import APIRouter, Depends, Query

from clinic_booking.api.deps import get_resolver, get_store
from clinic_booking.api.schemas import AppointmentOptionResponse, SpecialtyResponse
from clinic_booking.database import ClinicStore
from clinic_booking.services import AvailabilityResolver

router = APIRouter()


@router.get("/appointmentOptions", response_model=List[AppointmentOptionResponse])
async def get_appointment_options(
    date: Optional[str] = Query(None, description="Appointment date, YYYY-MM-DD"),
    resolver: AvailabilityResolver = Depends(get_resolver),
):
    """List treatments with the slots still open on ``date``."""
    return await resolver.resolve(date)


@router.get("/appointmentSpecialty", response_model=List[SpecialtyResponse])
async def get_appointment_specialties(store: ClinicStore = Depends(get_store)):
    """Get treatment names."""
    return [
        SpecialtyResponse(id=treatment_id, name=name)
        for treatment_id, name in await store.treatment_names()
    ]
