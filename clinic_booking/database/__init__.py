from clinic_booking.database.connection import Database, get_db
from clinic_booking.database.models import (
    Base,
    Booking,
    BookingStatus,
    Doctor,
    Payment,
    TreatmentOption,
    User,
    UserRole,
)
from clinic_booking.database.store import ClinicStore, parse_record_id

__all__ = [
    "Database",
    "get_db",
    "Base",
    "Booking",
    "BookingStatus",
    "Doctor",
    "Payment",
    "TreatmentOption",
    "User",
    "UserRole",
    "ClinicStore",
    "parse_record_id",
]
