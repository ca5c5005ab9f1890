"""Domain exceptions raised by the services and mapped to responses by the API."""


class ClinicError(Exception):
    """Base class for errors with a client-safe message."""

    status_code = 400
    message = "bad request"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class Unauthorized(ClinicError):
    status_code = 401
    message = "unauthorized access"


class Forbidden(ClinicError):
    status_code = 403
    message = "forbidden access"


class NotFound(ClinicError):
    status_code = 404
    message = "not found"


class InvalidIdentity(NotFound):
    """A record id that cannot identify any record."""

    message = "invalid record id"


class InvalidBooking(ClinicError):
    """Booking request referencing an unknown treatment or slot."""

    status_code = 400


class DuplicateBooking(ClinicError):
    """Insert lost against an existing active booking for the same triple."""

    status_code = 409
    message = "booking already exists"


class PaymentGatewayError(ClinicError):
    status_code = 502
    message = "payment gateway error"


class PaymentGatewayUnavailable(ClinicError):
    status_code = 503
    message = "payment gateway not configured"
