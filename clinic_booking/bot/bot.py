from typing import Optional

from aiogram import Bot
from aiogram.enums import ParseMode
from aiogram.client.default import DefaultBotProperties

from clinic_booking.config import Settings


def create_bot(settings: Settings) -> Optional[Bot]:
    """Create the staff notification bot, or None when no token is configured."""
    if not settings.telegram_bot_token:
        return None

    return Bot(
        token=settings.telegram_bot_token,
        default=DefaultBotProperties(parse_mode=ParseMode.HTML),
    )
