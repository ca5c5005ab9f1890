"""API tests for payment intents and payment confirmation."""

from types import SimpleNamespace

import stripe

BOOKING = {
    "email": "patient@x.com",
    "appointmentDate": "2024-05-01",
    "treatment": "Cleaning",
    "slot": "9:00",
    "price": 80,
}


class TestPaymentIntent:
    async def test_returns_client_secret(self, client, monkeypatch):
        calls = []

        def fake_create(**kwargs):
            calls.append(kwargs)
            return SimpleNamespace(client_secret="pi_123_secret_456")

        monkeypatch.setattr(stripe.PaymentIntent, "create", fake_create)

        response = await client.post("/create-payment-intent", json={"price": 80.5})

        assert response.status_code == 200
        assert response.json() == {"clientSecret": "pi_123_secret_456"}
        assert calls[0]["amount"] == 8050
        assert calls[0]["currency"] == "usd"
        assert calls[0]["payment_method_types"] == ["card"]

    async def test_gateway_error_is_502(self, client, monkeypatch):
        def failing_create(**kwargs):
            raise stripe.StripeError("card network exploded")

        monkeypatch.setattr(stripe.PaymentIntent, "create", failing_create)

        response = await client.post("/create-payment-intent", json={"price": 80})

        assert response.status_code == 502
        assert response.json() == {"message": "payment gateway error"}

    async def test_missing_key_is_503(self, app, client):
        app.state.payment_gateway.secret_key = None

        response = await client.post("/create-payment-intent", json={"price": 80})

        assert response.status_code == 503

    async def test_non_positive_price_is_422(self, client):
        response = await client.post("/create-payment-intent", json={"price": 0})

        assert response.status_code == 422


class TestConfirmPayment:
    async def test_marks_booking_paid(self, client):
        created = await client.post("/bookings", json=BOOKING)
        booking_id = created.json()["insertedId"]

        response = await client.post(
            "/payments",
            json={
                "booking": booking_id,
                "transactionId": "pi_123",
                "email": "patient@x.com",
                "price": 80,
            },
        )

        assert response.status_code == 200
        assert response.json()["acknowledged"] is True
        booking = (await client.get(f"/bookings/{booking_id}")).json()
        assert booking["paid"] is True
        assert booking["transactionId"] == "pi_123"

    async def test_string_booking_reference(self, client):
        created = await client.post("/bookings", json=BOOKING)
        booking_id = created.json()["insertedId"]

        response = await client.post(
            "/payments", json={"booking": str(booking_id), "transactionId": "pi_9"}
        )

        assert response.status_code == 200

    async def test_unknown_booking_is_404(self, client):
        response = await client.post("/payments", json={"booking": 999, "transactionId": "pi_1"})

        assert response.status_code == 404
        assert response.json() == {"message": "Booking not found"}

    async def test_missing_transaction_is_422(self, client):
        response = await client.post("/payments", json={"booking": 1})

        assert response.status_code == 422
