from clinic_booking.api.app import create_app

__all__ = ["create_app"]
