"""Service for computing which treatment slots are still open on a date."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Set

from clinic_booking.database import ClinicStore, TreatmentOption


@dataclass(frozen=True)
class TreatmentAvailability:
    """A treatment together with the slots nobody has booked yet."""

    id: int
    name: str
    price: Decimal
    slots: List[str]


def filter_available_slots(all_slots: Iterable[str], occupied_slots: Set[str]) -> List[str]:
    """Drop occupied labels, keeping catalog order and any repeated labels."""
    return [slot for slot in all_slots if slot not in occupied_slots]


def _availability(treatment: TreatmentOption, occupied: Set[str]) -> TreatmentAvailability:
    return TreatmentAvailability(
        id=treatment.id,
        name=treatment.name,
        price=treatment.price,
        slots=filter_available_slots(treatment.slots or [], occupied),
    )


class AvailabilityResolver:
    """Read-only view of open slots per treatment."""

    def __init__(self, store: ClinicStore):
        self.store = store

    async def resolve(self, appointment_date: Optional[str]) -> List[TreatmentAvailability]:
        """
        Get every treatment with its remaining slots for ``appointment_date``.
        A missing date matches no booking, so full catalogs are returned.
        """
        treatments = await self.store.list_treatments()
        bookings = await self.store.bookings_on(appointment_date)

        result = []
        for treatment in treatments:
            occupied = {
                booking.slot for booking in bookings if booking.treatment == treatment.name
            }
            result.append(_availability(treatment, occupied))
        return result

    async def resolve_joined(
        self, appointment_date: Optional[str]
    ) -> List[TreatmentAvailability]:
        """Same result as :meth:`resolve`, computed from a single outer join."""
        rows = await self.store.treatments_with_booked_slots(appointment_date)

        treatments: Dict[int, TreatmentOption] = {}
        occupied: Dict[int, Set[str]] = {}
        for treatment, slot in rows:
            treatments.setdefault(treatment.id, treatment)
            booked = occupied.setdefault(treatment.id, set())
            if slot is not None:
                booked.add(slot)

        return [
            _availability(treatment, occupied[treatment_id])
            for treatment_id, treatment in treatments.items()
        ]
