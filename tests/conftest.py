from decimal import Decimal

import httpx
import pytest
import pytest_asyncio

from clinic_booking.api import create_app
from clinic_booking.config import Settings
from clinic_booking.database import (
    Booking,
    BookingStatus,
    ClinicStore,
    Database,
    TreatmentOption,
    User,
    UserRole,
)
from clinic_booking.services.tokens import create_access_token

CLEANING_SLOTS = ["9:00", "10:00", "11:00"]
WHITENING_SLOTS = ["9:00", "9:00", "13:00"]


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'clinic.db'}",
        access_token_secret="test-secret",
        stripe_secret_key="sk_test_dummy",
        telegram_bot_token=None,
        notify_chat_id=None,
    )


async def seed_treatments(store: ClinicStore) -> None:
    store.session.add_all(
        [
            TreatmentOption(name="Cleaning", price=Decimal("80"), slots=list(CLEANING_SLOTS)),
            TreatmentOption(name="Whitening", price=Decimal("150"), slots=list(WHITENING_SLOTS)),
        ]
    )
    await store.commit()


async def add_booking(
    store: ClinicStore,
    treatment: str = "Cleaning",
    appointment_date: str = "2024-05-01",
    slot: str = "10:00",
    email: str = "someone@x.com",
    status: BookingStatus = BookingStatus.BOOKED,
) -> Booking:
    booking = Booking(
        email=email,
        treatment=treatment,
        appointment_date=appointment_date,
        slot=slot,
        price=Decimal("80"),
        status=status,
    )
    await store.add_booking(booking)
    await store.commit()
    return booking


@pytest_asyncio.fixture
async def database(settings):
    db = Database(settings.database_url)
    await db.connect()
    yield db
    await db.close()


@pytest_asyncio.fixture
async def store(database):
    async with database.session() as session:
        clinic_store = ClinicStore(session)
        await seed_treatments(clinic_store)
        yield clinic_store


@pytest_asyncio.fixture
async def app(settings):
    application = create_app(settings)
    async with application.router.lifespan_context(application):
        async with application.state.database.session() as session:
            app_store = ClinicStore(session)
            await seed_treatments(app_store)
            app_store.session.add_all(
                [
                    User(email="patient@x.com", name="Patient", role=UserRole.USER),
                    User(email="admin@x.com", name="Admin", role=UserRole.ADMIN),
                ]
            )
            await app_store.commit()
        yield application


@pytest_asyncio.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client


@pytest.fixture
def auth_header(settings):
    def _header(email: str) -> dict:
        return {"Authorization": f"Bearer {create_access_token(email, settings)}"}

    return _header
