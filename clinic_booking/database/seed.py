"""Demo treatment catalog and admin account."""

from decimal import Decimal
from typing import List, Optional

from clinic_booking.database.models import TreatmentOption, User, UserRole
from clinic_booking.database.store import ClinicStore

DEFAULT_SLOTS = [
    "08:00 AM - 08:30 AM",
    "08:30 AM - 09:00 AM",
    "09:00 AM - 09:30 AM",
    "09:30 AM - 10:00 AM",
    "10:00 AM - 10:30 AM",
    "10:30 AM - 11:00 AM",
    "11:00 AM - 11:30 AM",
    "11:30 AM - 12:00 PM",
    "01:00 PM - 01:30 PM",
    "01:30 PM - 02:00 PM",
    "02:00 PM - 02:30 PM",
    "02:30 PM - 03:00 PM",
    "03:00 PM - 03:30 PM",
    "03:30 PM - 04:00 PM",
    "04:00 PM - 04:30 PM",
    "04:30 PM - 05:00 PM",
]

TREATMENTS = [
    ("Teeth Orthodontics", Decimal("120")),
    ("Cosmetic Dentistry", Decimal("150")),
    ("Teeth Cleaning", Decimal("80")),
    ("Cavity Protection", Decimal("95")),
    ("Pediatric Dental", Decimal("70")),
    ("Oral Surgery", Decimal("200")),
]


async def seed_catalog(store: ClinicStore, admin_email: Optional[str] = None) -> List[TreatmentOption]:
    """Insert the demo catalog unless treatments already exist.

    Returns the treatments that were created (empty when already seeded).
    """
    if await store.list_treatments():
        return []

    treatments = [
        TreatmentOption(name=name, price=price, slots=list(DEFAULT_SLOTS))
        for name, price in TREATMENTS
    ]
    store.session.add_all(treatments)

    if admin_email and await store.get_user_by_email(admin_email) is None:
        await store.add_user(User(email=admin_email, name="Clinic Admin", role=UserRole.ADMIN))

    await store.commit()
    return treatments
