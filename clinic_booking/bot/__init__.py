from clinic_booking.bot.bot import create_bot

__all__ = ["create_bot"]
