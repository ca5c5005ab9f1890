"""API tests for availability, bookings and the bearer-token guard."""

from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt
from sqlalchemy.exc import OperationalError

from clinic_booking.api.deps import get_resolver

BOOKING = {
    "email": "patient@x.com",
    "appointmentDate": "2024-05-01",
    "treatment": "Cleaning",
    "slot": "10:00",
    "price": 80,
    "patientName": "Pat",
}


class TestRoot:
    async def test_root(self, client):
        response = await client.get("/")
        assert response.status_code == 200
        assert response.text == "Server Running"

    async def test_health(self, client):
        response = await client.get("/health")
        assert response.json() == {"status": "ok"}


class TestAppointmentOptions:
    async def test_full_catalog_without_bookings(self, client):
        response = await client.get("/appointmentOptions", params={"date": "2024-05-01"})

        assert response.status_code == 200
        body = response.json()
        assert [item["name"] for item in body] == ["Cleaning", "Whitening"]
        assert body[0]["slots"] == ["9:00", "10:00", "11:00"]
        assert body[0]["price"] == 80.0

    async def test_booked_slot_disappears(self, client):
        await client.post("/bookings", json=BOOKING)

        response = await client.get("/appointmentOptions", params={"date": "2024-05-01"})

        cleaning = next(item for item in response.json() if item["name"] == "Cleaning")
        assert cleaning["slots"] == ["9:00", "11:00"]

    async def test_without_date_returns_full_lists(self, client):
        await client.post("/bookings", json=BOOKING)

        response = await client.get("/appointmentOptions")

        cleaning = next(item for item in response.json() if item["name"] == "Cleaning")
        assert cleaning["slots"] == ["9:00", "10:00", "11:00"]

    async def test_specialties(self, client):
        response = await client.get("/appointmentSpecialty")

        assert [item["name"] for item in response.json()] == ["Cleaning", "Whitening"]

    async def test_storage_failure_is_503(self, app, client):
        class BrokenResolver:
            async def resolve(self, appointment_date):
                raise OperationalError("SELECT 1", {}, Exception("connection refused"))

        app.dependency_overrides[get_resolver] = lambda: BrokenResolver()
        try:
            response = await client.get("/appointmentOptions", params={"date": "2024-05-01"})
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 503
        assert response.json() == {"message": "service unavailable"}
        assert "connection refused" not in response.text


class TestCreateBooking:
    async def test_accepted(self, client):
        response = await client.post("/bookings", json=BOOKING)

        assert response.status_code == 200
        body = response.json()
        assert body["acknowledged"] is True
        assert isinstance(body["insertedId"], int)

    async def test_duplicate_is_soft_rejected(self, client):
        await client.post("/bookings", json=BOOKING)

        response = await client.post("/bookings", json={**BOOKING, "slot": "11:00"})

        assert response.status_code == 200
        body = response.json()
        assert body["acknowledged"] is False
        assert "2024-05-01" in body["message"]
        assert "insertedId" not in body

    async def test_missing_field_is_422(self, client):
        payload = {key: value for key, value in BOOKING.items() if key != "treatment"}

        response = await client.post("/bookings", json=payload)

        assert response.status_code == 422

    async def test_bad_date_format_is_422(self, client):
        response = await client.post("/bookings", json={**BOOKING, "appointmentDate": "May 1"})

        assert response.status_code == 422

    async def test_unknown_slot_is_400(self, client):
        response = await client.post("/bookings", json={**BOOKING, "slot": "23:00"})

        assert response.status_code == 400
        assert "23:00" in response.json()["message"]


class TestGetBooking:
    async def test_fetch_by_id(self, client):
        created = await client.post("/bookings", json=BOOKING)
        booking_id = created.json()["insertedId"]

        response = await client.get(f"/bookings/{booking_id}")

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == booking_id
        assert body["appointmentDate"] == "2024-05-01"
        assert body["patientName"] == "Pat"
        assert body["paid"] is False
        assert body["transactionId"] is None

    async def test_unknown_id_is_404(self, client):
        response = await client.get("/bookings/999")

        assert response.status_code == 404
        assert response.json() == {"message": "Booking not found"}

    async def test_malformed_id_is_404(self, client):
        response = await client.get("/bookings/not-an-id")

        assert response.status_code == 404
        assert response.json() == {"message": "invalid record id"}

    @pytest.mark.parametrize("booking_id", ["\u00b2", "99999999999999999999999"])
    async def test_superscript_or_oversized_id_is_404(self, client, booking_id):
        response = await client.get(f"/bookings/{booking_id}")

        assert response.status_code == 404
        assert response.json() == {"message": "invalid record id"}


class TestPatientBookings:
    async def test_missing_header_is_401(self, client):
        response = await client.get("/bookings", params={"email": "patient@x.com"})

        assert response.status_code == 401
        assert response.text == "unauthorized access"

    async def test_other_email_is_403(self, client, auth_header):
        response = await client.get(
            "/bookings",
            params={"email": "patient@x.com"},
            headers=auth_header("intruder@x.com"),
        )

        assert response.status_code == 403
        assert response.json() == {"message": "forbidden access"}

    async def test_invalid_token_is_403(self, client):
        response = await client.get(
            "/bookings",
            params={"email": "patient@x.com"},
            headers={"Authorization": "Bearer garbage"},
        )

        assert response.status_code == 403
        assert response.json() == {"message": "forbidden access"}

    async def test_non_bearer_scheme_is_403(self, client):
        response = await client.get(
            "/bookings",
            params={"email": "patient@x.com"},
            headers={"Authorization": "Basic xyz"},
        )

        assert response.status_code == 403
        assert response.json() == {"message": "forbidden access"}

    async def test_expired_token_is_403(self, client, settings):
        token = jwt.encode(
            {"email": "patient@x.com", "exp": datetime.now(timezone.utc) - timedelta(minutes=5)},
            settings.access_token_secret,
            algorithm="HS256",
        )

        response = await client.get(
            "/bookings",
            params={"email": "patient@x.com"},
            headers={"Authorization": f"Bearer {token}"},
        )

        assert response.status_code == 403

    async def test_lists_own_bookings(self, client, auth_header):
        await client.post("/bookings", json=BOOKING)
        await client.post("/bookings", json={**BOOKING, "email": "other@x.com"})

        response = await client.get(
            "/bookings",
            params={"email": "patient@x.com"},
            headers=auth_header("patient@x.com"),
        )

        assert response.status_code == 200
        body = response.json()
        assert len(body) == 1
        assert body[0]["email"] == "patient@x.com"


class TestCancelBooking:
    async def test_owner_cancels_and_slot_reopens(self, client, auth_header):
        created = await client.post("/bookings", json=BOOKING)
        booking_id = created.json()["insertedId"]

        response = await client.patch(
            f"/bookings/{booking_id}/cancel", headers=auth_header("patient@x.com")
        )

        assert response.status_code == 200
        assert response.json()["status"] == "cancelled"
        options = await client.get("/appointmentOptions", params={"date": "2024-05-01"})
        assert options.json()[0]["slots"] == ["9:00", "10:00", "11:00"]

    async def test_other_patient_is_403(self, client, auth_header):
        created = await client.post("/bookings", json=BOOKING)
        booking_id = created.json()["insertedId"]

        response = await client.patch(
            f"/bookings/{booking_id}/cancel", headers=auth_header("other@x.com")
        )

        assert response.status_code == 403
        assert response.json() == {"message": "forbidden access"}
        fetched = await client.get(f"/bookings/{booking_id}")
        assert fetched.json()["status"] == "booked"
