from clinic_booking.services.admission import (
    AdmissionController,
    AdmissionResult,
    BookingRequest,
    PaymentConfirmation,
)
from clinic_booking.services.availability import (
    AvailabilityResolver,
    TreatmentAvailability,
    filter_available_slots,
)
from clinic_booking.services.events import BookingAdmitted, EventPublisher
from clinic_booking.services.notifications import NotificationService
from clinic_booking.services.payments import PaymentGateway

__all__ = [
    "AdmissionController",
    "AdmissionResult",
    "BookingRequest",
    "PaymentConfirmation",
    "AvailabilityResolver",
    "TreatmentAvailability",
    "filter_available_slots",
    "BookingAdmitted",
    "EventPublisher",
    "NotificationService",
    "PaymentGateway",
]
