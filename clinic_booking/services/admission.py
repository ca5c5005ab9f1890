"""Booking admission: conflict check, insert, payment confirmation."""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from clinic_booking.database import Booking, BookingStatus, ClinicStore, Payment
from clinic_booking.errors import DuplicateBooking, InvalidBooking, NotFound
from clinic_booking.services.events import BookingAdmitted, EventPublisher

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BookingRequest:
    email: str
    appointment_date: str
    treatment: str
    slot: str
    price: Decimal
    patient_name: Optional[str] = None
    phone: Optional[str] = None


@dataclass(frozen=True)
class AdmissionResult:
    accepted: bool
    booking: Optional[Booking] = None
    message: Optional[str] = None


@dataclass(frozen=True)
class PaymentConfirmation:
    payment: Payment
    modified_count: int


def conflict_message(appointment_date: str) -> str:
    return f"You already have a booking on {appointment_date}"


class AdmissionController:
    """Admits booking requests, at most one active booking per (email, date, treatment)."""

    def __init__(
        self,
        store: ClinicStore,
        events: Optional[EventPublisher] = None,
        enforce_slot_validity: bool = True,
    ):
        self.store = store
        self.events = events
        self.enforce_slot_validity = enforce_slot_validity

    async def _check_slot(self, request: BookingRequest) -> None:
        treatment = await self.store.get_treatment(request.treatment)
        if treatment is None:
            raise InvalidBooking(f"Unknown treatment: {request.treatment}")
        if request.slot not in (treatment.slots or []):
            raise InvalidBooking(f"Slot {request.slot} is not offered for {request.treatment}")

    def _reject(self, request: BookingRequest) -> AdmissionResult:
        logger.info(
            "Rejected duplicate booking for %s on %s (%s)",
            request.email,
            request.appointment_date,
            request.treatment,
        )
        return AdmissionResult(accepted=False, message=conflict_message(request.appointment_date))

    async def admit(self, request: BookingRequest) -> AdmissionResult:
        if self.enforce_slot_validity:
            await self._check_slot(request)

        existing = await self.store.find_active_bookings(
            request.appointment_date, request.email, request.treatment
        )
        if existing:
            return self._reject(request)

        booking = Booking(
            email=request.email,
            patient_name=request.patient_name,
            phone=request.phone,
            treatment=request.treatment,
            appointment_date=request.appointment_date,
            slot=request.slot,
            price=request.price,
            paid=False,
            status=BookingStatus.BOOKED,
        )

        # A concurrent admission may have inserted the same triple since the check
        try:
            await self.store.add_booking(booking)
        except DuplicateBooking:
            return self._reject(request)
        await self.store.commit()

        logger.info(
            "Booking %s admitted: %s %s %s for %s",
            booking.id,
            booking.treatment,
            booking.appointment_date,
            booking.slot,
            booking.email,
        )

        if self.events is not None:
            self.events.publish(
                BookingAdmitted(
                    booking_id=booking.id,
                    email=booking.email,
                    patient_name=booking.patient_name,
                    treatment=booking.treatment,
                    appointment_date=booking.appointment_date,
                    slot=booking.slot,
                    price=booking.price,
                )
            )

        return AdmissionResult(accepted=True, booking=booking)

    async def confirm_payment(
        self,
        booking_id: str | int,
        transaction_id: str,
        email: Optional[str] = None,
        price: Optional[Decimal] = None,
    ) -> PaymentConfirmation:
        """Record a payment and flag the booking as paid."""
        booking = await self.store.get_booking(booking_id)
        if booking is None:
            raise NotFound("Booking not found")

        payment = await self.store.add_payment(
            Payment(
                booking_id=booking.id,
                transaction_id=transaction_id,
                email=email,
                price=price,
            )
        )
        modified = await self.store.mark_booking_paid(booking.id, transaction_id)
        await self.store.commit()

        logger.info("Payment %s recorded for booking %s", transaction_id, booking.id)
        return PaymentConfirmation(payment=payment, modified_count=modified)

    async def cancel(self, booking_id: str | int) -> Booking:
        """Cancel a booking, freeing its slot."""
        booking = await self.store.get_booking(booking_id)
        if booking is None:
            raise NotFound("Booking not found")

        if booking.status != BookingStatus.CANCELLED:
            booking.status = BookingStatus.CANCELLED
            await self.store.commit()
            logger.info("Booking %s cancelled", booking.id)

        return booking
