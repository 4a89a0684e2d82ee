from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from ..core.enums import TimeSlot
from .model import StaffWithAvailability


@dataclass(frozen=True)
class SlotRoster:
    time_slot: TimeSlot
    staff_names: tuple[str, ...]


@dataclass(frozen=True)
class TodaySchedule:
    day_of_week: int
    slots: tuple[SlotRoster, ...]

    @property
    def has_any_staff(self) -> bool:
        return any(slot.staff_names for slot in self.slots)


def today_schedule(staff_availability: Iterable[StaffWithAvailability], day_of_week: int) -> TodaySchedule:
    """Names of staff registered for each slot of the given weekday, morning first."""

    staff_availability = list(staff_availability)
    slots = tuple(
        SlotRoster(
            time_slot=slot,
            staff_names=tuple(s.name for s in staff_availability if s.is_available(day_of_week, slot)),
        )
        for slot in TimeSlot
    )
    return TodaySchedule(day_of_week=day_of_week, slots=slots)
