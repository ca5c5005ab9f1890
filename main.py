"""
Clinic Booking - treatment availability and booking API.

Usage:
    python main.py api                  - Run the API server
    python main.py seed [admin_email]   - Seed database with the demo treatment catalog
"""

import asyncio
import logging
import sys
import uvicorn


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def run_api():
    """Run the API server."""
    from clinic_booking.config import get_settings
    from clinic_booking.api import create_app

    settings = get_settings()
    configure_logging(settings.log_level)
    app = create_app(settings)

    print(f"🌐 Starting API server on {settings.api_host}:{settings.api_port}...")
    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


async def seed_database(admin_email: str | None = None):
    """Seed database with demo data."""
    from clinic_booking.config import get_settings
    from clinic_booking.database import ClinicStore, Database
    from clinic_booking.database.seed import seed_catalog

    settings = get_settings()
    configure_logging(settings.log_level)

    print("🌱 Seeding database...")

    database = Database(settings.database_url, echo=settings.database_echo)
    await database.connect()
    try:
        async with database.session() as session:
            created = await seed_catalog(ClinicStore(session), admin_email=admin_email)
    finally:
        await database.close()

    if not created:
        print("⚠️ Database already seeded!")
        return

    print("✅ Database seeded successfully!")
    print(f"   - {len(created)} treatments")
    if admin_email:
        print(f"   - admin {admin_email}")


def main():
    """Main entry point."""
    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(1)

    command = sys.argv[1].lower()

    if command == "api":
        run_api()
    elif command == "seed":
        admin_email = sys.argv[2] if len(sys.argv) > 2 else None
        asyncio.run(seed_database(admin_email))
    else:
        print(f"Unknown command: {command}")
        print(__doc__)
        sys.exit(1)


if __name__ == "__main__":
    main()
