from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional, List
from sqlalchemy import (
    JSON,
    String,
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Numeric,
    Enum as SQLEnum,
    text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class BookingStatus(str, Enum):
    """Booking status enumeration."""

    BOOKED = "booked"
    CANCELLED = "cancelled"


class UserRole(str, Enum):
    """User role enumeration."""

    USER = "user"
    ADMIN = "admin"


class TreatmentOption(Base):
    """Bookable clinic treatment with its daily slot catalog."""

    __tablename__ = "treatments"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2))
    # Ordered slot labels, e.g. "10:00 AM"
    slots: Mapped[List[str]] = mapped_column(JSON, default=list)


class Booking(Base):
    """A patient's reservation of one slot of one treatment on one date."""

    __tablename__ = "bookings"
    __table_args__ = (
        # One active booking per (treatment, date, patient); cancelled rows are exempt
        Index(
            "uq_active_booking",
            "treatment",
            "appointment_date",
            "email",
            unique=True,
            sqlite_where=text("status != 'CANCELLED'"),
            postgresql_where=text("status != 'CANCELLED'"),
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    email: Mapped[str] = mapped_column(String(255), index=True)
    patient_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)

    # Treatment name, soft reference to TreatmentOption.name
    treatment: Mapped[str] = mapped_column(String(255))
    appointment_date: Mapped[str] = mapped_column(String(10), index=True)  # "YYYY-MM-DD"
    slot: Mapped[str] = mapped_column(String(50))
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2))

    # Payment
    paid: Mapped[bool] = mapped_column(Boolean, default=False)
    transaction_id: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    status: Mapped[BookingStatus] = mapped_column(
        SQLEnum(BookingStatus, native_enum=False), default=BookingStatus.BOOKED
    )

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


class Payment(Base):
    """Payment confirmation recorded against a booking."""

    __tablename__ = "payments"

    id: Mapped[int] = mapped_column(primary_key=True)
    booking_id: Mapped[int] = mapped_column(ForeignKey("bookings.id"), index=True)
    transaction_id: Mapped[str] = mapped_column(String(255))
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    price: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


class User(Base):
    """User model - patients and clinic admins."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    role: Mapped[UserRole] = mapped_column(
        SQLEnum(UserRole, native_enum=False), default=UserRole.USER
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


class Doctor(Base):
    """Staff directory entry."""

    __tablename__ = "doctors"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255))
    email: Mapped[str] = mapped_column(String(255))
    specialty: Mapped[str] = mapped_column(String(255))
    image: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
