"""Request dependencies: store, services and the access guard."""

from typing import Optional

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from clinic_booking.config import Settings
from clinic_booking.database import Booking, ClinicStore, UserRole, get_db
from clinic_booking.errors import Forbidden, NotFound, Unauthorized
from clinic_booking.services import AdmissionController, AvailabilityResolver, PaymentGateway
from clinic_booking.services.tokens import decode_access_token


def get_settings_dep(request: Request) -> Settings:
    return request.app.state.settings


def get_store(db: AsyncSession = Depends(get_db)) -> ClinicStore:
    return ClinicStore(db)


def get_resolver(store: ClinicStore = Depends(get_store)) -> AvailabilityResolver:
    return AvailabilityResolver(store)


def get_admission_controller(
    request: Request,
    store: ClinicStore = Depends(get_store),
    settings: Settings = Depends(get_settings_dep),
) -> AdmissionController:
    return AdmissionController(
        store,
        events=request.app.state.events,
        enforce_slot_validity=settings.enforce_slot_validity,
    )


def get_payment_gateway(request: Request) -> PaymentGateway:
    return request.app.state.payment_gateway


async def verify_jwt(
    authorization: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings_dep),
) -> str:
    """Return the email asserted by the bearer token."""
    if not authorization:
        raise Unauthorized()

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise Forbidden()

    return decode_access_token(token.strip(), settings)


async def verify_booking_owner(
    booking_id: str,
    email: str = Depends(verify_jwt),
    store: ClinicStore = Depends(get_store),
) -> Booking:
    """Return the booking when it belongs to the token's email."""
    booking = await store.get_booking(booking_id)
    if booking is None:
        raise NotFound("Booking not found")
    if booking.email != email:
        raise Forbidden()
    return booking


async def verify_admin(
    email: str = Depends(verify_jwt),
    store: ClinicStore = Depends(get_store),
) -> str:
    user = await store.get_user_by_email(email)
    if user is None or user.role != UserRole.ADMIN:
        raise Forbidden()
    return email
