"""Post-commit events and their asynchronous delivery."""

import asyncio
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Awaitable, Callable, List, Optional, Set

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BookingAdmitted:
    booking_id: int
    email: str
    patient_name: Optional[str]
    treatment: str
    appointment_date: str
    slot: str
    price: Decimal


EventHandler = Callable[[BookingAdmitted], Awaitable[None]]


class EventPublisher:
    """Fans events out to subscribers as background tasks.

    Publishing never waits for delivery and never raises because of a
    subscriber; handler failures are logged here.
    """

    def __init__(self):
        self._handlers: List[EventHandler] = []
        self._pending: Set[asyncio.Task] = set()

    def subscribe(self, handler: EventHandler) -> None:
        self._handlers.append(handler)

    def publish(self, event: BookingAdmitted) -> None:
        for handler in self._handlers:
            task = asyncio.create_task(self._deliver(handler, event))
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)

    async def _deliver(self, handler: EventHandler, event: BookingAdmitted) -> None:
        try:
            await handler(event)
        except Exception:
            logger.exception(
                "Event handler %s failed for booking %s",
                getattr(handler, "__qualname__", handler),
                event.booking_id,
            )

    async def drain(self) -> None:
        """Wait for in-flight deliveries (used at shutdown)."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
