from fastapi import APIRouter, Depends

from clinic_booking.api.deps import get_admission_controller, get_payment_gateway
from clinic_booking.api.schemas import (
    InsertAck,
    PaymentCreate,
    PaymentIntentCreate,
    PaymentIntentResponse,
)
from clinic_booking.services import AdmissionController, PaymentGateway

router = APIRouter()


@router.post("/create-payment-intent", response_model=PaymentIntentResponse)
async def create_payment_intent(
    intent_data: PaymentIntentCreate,
    gateway: PaymentGateway = Depends(get_payment_gateway),
):
    """Ask the payment gateway for a card payment intent."""
    client_secret = await gateway.create_intent(intent_data.price)
    return PaymentIntentResponse(client_secret=client_secret)


@router.post("/payments", response_model=InsertAck, response_model_exclude_none=True)
async def confirm_payment(
    payment_data: PaymentCreate,
    controller: AdmissionController = Depends(get_admission_controller),
):
    """Record a successful payment and mark the booking as paid."""
    confirmation = await controller.confirm_payment(
        payment_data.booking_id,
        payment_data.transaction_id,
        email=payment_data.email,
        price=payment_data.price,
    )
    return InsertAck(acknowledged=True, inserted_id=confirmation.payment.id)
