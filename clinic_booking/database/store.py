"""Data access used by the availability and admission services."""

from typing import List, Optional, Sequence, Tuple
from sqlalchemy import and_, delete, false, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from clinic_booking.database.models import (
    Booking,
    BookingStatus,
    Doctor,
    Payment,
    TreatmentOption,
    User,
)
from clinic_booking.errors import DuplicateBooking, InvalidIdentity

MAX_RECORD_ID = 2**63 - 1


def parse_record_id(raw: str | int) -> int:
    """Convert a path/body record reference into a primary key."""
    if isinstance(raw, bool):
        raise InvalidIdentity()
    if isinstance(raw, int):
        value = raw
    else:
        raw = raw.strip()
        # isdigit() accepts superscripts that int() rejects
        if not (raw.isascii() and raw.isdecimal()):
            raise InvalidIdentity()
        value = int(raw)
    # Keys are signed 64-bit integers in the store
    if value <= 0 or value > MAX_RECORD_ID:
        raise InvalidIdentity()
    return value


def _same_day(appointment_date: Optional[str]):
    # No date means no booking can match
    if appointment_date is None:
        return false()
    return Booking.appointment_date == appointment_date


class ClinicStore:
    """Thin wrapper over an AsyncSession exposing the queries the services need."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()

    # ==================== TREATMENTS ====================

    async def list_treatments(self) -> Sequence[TreatmentOption]:
        result = await self.session.execute(
            select(TreatmentOption).order_by(TreatmentOption.id)
        )
        return result.scalars().all()

    async def get_treatment(self, name: str) -> Optional[TreatmentOption]:
        result = await self.session.execute(
            select(TreatmentOption).where(TreatmentOption.name == name)
        )
        return result.scalar_one_or_none()

    async def treatment_names(self) -> List[Tuple[int, str]]:
        result = await self.session.execute(
            select(TreatmentOption.id, TreatmentOption.name).order_by(TreatmentOption.id)
        )
        return [(row.id, row.name) for row in result]

    async def treatments_with_booked_slots(
        self, appointment_date: Optional[str]
    ) -> List[Tuple[TreatmentOption, Optional[str]]]:
        """Outer join of treatments and same-day active bookings.

        Yields one row per (treatment, booked slot); treatments without a
        booking on that day appear once with ``None``.
        """
        join_on = and_(
            Booking.treatment == TreatmentOption.name,
            _same_day(appointment_date),
            Booking.status != BookingStatus.CANCELLED,
        )
        result = await self.session.execute(
            select(TreatmentOption, Booking.slot)
            .outerjoin(Booking, join_on)
            .order_by(TreatmentOption.id, Booking.id)
        )
        return [(row[0], row[1]) for row in result.all()]

    # ==================== BOOKINGS ====================

    async def bookings_on(self, appointment_date: Optional[str]) -> Sequence[Booking]:
        result = await self.session.execute(
            select(Booking).where(
                _same_day(appointment_date),
                Booking.status != BookingStatus.CANCELLED,
            )
        )
        return result.scalars().all()

    async def find_active_bookings(
        self, appointment_date: str, email: str, treatment: str
    ) -> Sequence[Booking]:
        result = await self.session.execute(
            select(Booking).where(
                Booking.appointment_date == appointment_date,
                Booking.email == email,
                Booking.treatment == treatment,
                Booking.status != BookingStatus.CANCELLED,
            )
        )
        return result.scalars().all()

    async def add_booking(self, booking: Booking) -> Booking:
        """Insert a booking; raises DuplicateBooking when the unique index rejects it."""
        self.session.add(booking)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            await self.session.rollback()
            raise DuplicateBooking() from exc
        return booking

    async def get_booking(self, booking_id: str | int) -> Optional[Booking]:
        return await self.session.get(Booking, parse_record_id(booking_id))

    async def bookings_for_patient(self, email: str) -> Sequence[Booking]:
        result = await self.session.execute(
            select(Booking)
            .where(Booking.email == email)
            .order_by(Booking.appointment_date.desc(), Booking.id.desc())
        )
        return result.scalars().all()

    async def count_bookings(self) -> int:
        result = await self.session.execute(select(func.count(Booking.id)))
        return result.scalar_one()

    async def mark_booking_paid(self, booking_id: int, transaction_id: str) -> int:
        result = await self.session.execute(
            update(Booking)
            .where(Booking.id == booking_id)
            .values(paid=True, transaction_id=transaction_id)
        )
        return result.rowcount

    # ==================== PAYMENTS ====================

    async def add_payment(self, payment: Payment) -> Payment:
        self.session.add(payment)
        await self.session.flush()
        return payment

    async def payments_for_booking(self, booking_id: int) -> Sequence[Payment]:
        result = await self.session.execute(
            select(Payment).where(Payment.booking_id == booking_id).order_by(Payment.id)
        )
        return result.scalars().all()

    # ==================== USERS ====================

    async def get_user_by_email(self, email: str) -> Optional[User]:
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def get_user(self, user_id: str | int) -> Optional[User]:
        return await self.session.get(User, parse_record_id(user_id))

    async def list_users(self) -> Sequence[User]:
        result = await self.session.execute(select(User).order_by(User.id))
        return result.scalars().all()

    async def add_user(self, user: User) -> User:
        self.session.add(user)
        await self.session.flush()
        return user

    # ==================== DOCTORS ====================

    async def list_doctors(self) -> Sequence[Doctor]:
        result = await self.session.execute(select(Doctor).order_by(Doctor.id))
        return result.scalars().all()

    async def add_doctor(self, doctor: Doctor) -> Doctor:
        self.session.add(doctor)
        await self.session.flush()
        return doctor

    async def delete_doctor(self, doctor_id: str | int) -> int:
        result = await self.session.execute(
            delete(Doctor).where(Doctor.id == parse_record_id(doctor_id))
        )
        return result.rowcount
