"""Stripe payment-intent creation."""

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

import stripe
from starlette.concurrency import run_in_threadpool

from clinic_booking.errors import PaymentGatewayError, PaymentGatewayUnavailable

logger = logging.getLogger(__name__)


def to_minor_units(price: Decimal) -> int:
    """Convert a currency amount to cents."""
    return int((Decimal(price) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class PaymentGateway:
    def __init__(self, secret_key: Optional[str], currency: str = "usd"):
        self.secret_key = secret_key
        self.currency = currency

    async def create_intent(self, price: Decimal) -> str:
        """Create a card PaymentIntent and return its client secret."""
        if not self.secret_key:
            raise PaymentGatewayUnavailable()

        amount = to_minor_units(price)
        try:
            intent = await run_in_threadpool(
                stripe.PaymentIntent.create,
                amount=amount,
                currency=self.currency,
                payment_method_types=["card"],
                api_key=self.secret_key,
            )
        except stripe.StripeError as exc:
            logger.exception("Stripe PaymentIntent creation failed for amount %s", amount)
            raise PaymentGatewayError() from exc

        return intent.client_secret
