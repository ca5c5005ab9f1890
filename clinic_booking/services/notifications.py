"""Notification service for telling clinic staff about new bookings."""

import html
import logging

from aiogram import Bot
from aiogram.exceptions import TelegramAPIError

from clinic_booking.services.events import BookingAdmitted

logger = logging.getLogger(__name__)


class NotificationService:
    """Sends booking notifications to the staff Telegram chat."""

    def __init__(self, bot: Bot, chat_id: int):
        self.bot = bot
        self.chat_id = chat_id

    def _format_booking_info(self, event: BookingAdmitted) -> str:
        """Format booking info for notification."""
        lines = [
            f"<b>{html.escape(event.treatment)}</b>",
            f"📅 Date: {html.escape(event.appointment_date)}",
            f"🕐 Slot: {html.escape(event.slot)}",
            f"👤 Patient: {html.escape(event.patient_name or event.email)}",
            f"✉️ Email: {html.escape(event.email)}",
            f"💰 Price: {event.price}",
        ]
        return "\n".join(lines)

    async def notify_booking_admitted(self, event: BookingAdmitted) -> None:
        """Notify staff about a new booking."""
        text = (
            "🔔 <b>New booking</b>\n\n"
            f"{self._format_booking_info(event)}"
        )

        try:
            await self.bot.send_message(chat_id=self.chat_id, text=text)
        except TelegramAPIError:
            logger.exception("Failed to send notification for booking %s", event.booking_id)
