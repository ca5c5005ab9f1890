import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError

from clinic_booking.api.routes import appointments, bookings, doctors, payments, users
from clinic_booking.bot import create_bot
from clinic_booking.config import Settings, get_settings
from clinic_booking.database import Database
from clinic_booking.errors import ClinicError, Unauthorized
from clinic_booking.services import EventPublisher, NotificationService, PaymentGateway

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings

    database = Database(settings.database_url, echo=settings.database_echo)
    await database.connect()
    app.state.database = database

    events = EventPublisher()
    app.state.events = events
    app.state.payment_gateway = PaymentGateway(
        settings.stripe_secret_key, currency=settings.payment_currency
    )

    bot = create_bot(settings)
    if bot is not None and settings.notify_chat_id is not None:
        notifier = NotificationService(bot, settings.notify_chat_id)
        events.subscribe(notifier.notify_booking_admitted)
    else:
        logger.info("Staff notifications disabled: no bot token or chat id configured")

    try:
        yield
    finally:
        await events.drain()
        if bot is not None:
            await bot.session.close()
        await database.close()


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(Unauthorized)
    async def unauthorized_handler(request: Request, exc: Unauthorized):
        return PlainTextResponse(exc.message, status_code=exc.status_code)

    @app.exception_handler(ClinicError)
    async def clinic_error_handler(request: Request, exc: ClinicError):
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @app.exception_handler(SQLAlchemyError)
    async def storage_error_handler(request: Request, exc: SQLAlchemyError):
        logger.exception("Storage failure on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=503, content={"message": "service unavailable"})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"message": "internal server error"})


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure FastAPI application."""
    app = FastAPI(
        title="Clinic Booking API",
        description="Treatment availability, bookings and payments for a clinic",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings or get_settings()

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app.state.settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(appointments.router, tags=["Appointments"])
    app.include_router(bookings.router, prefix="/bookings", tags=["Bookings"])
    app.include_router(payments.router, tags=["Payments"])
    app.include_router(users.router, tags=["Users"])
    app.include_router(doctors.router, prefix="/doctors", tags=["Doctors"])

    @app.get("/")
    async def root():
        return PlainTextResponse("Server Running")

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "ok"}

    return app
