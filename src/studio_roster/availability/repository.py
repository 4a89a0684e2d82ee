from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import TimeSlot
from .model import StaffAvailability


class AvailabilityRepository(Protocol):
    def list_all(self) -> Sequence[StaffAvailability]:
        raise NotImplementedError

    def find(self, *, staff_id: str, day_of_week: int, time_slot: TimeSlot) -> Optional[StaffAvailability]:
        raise NotImplementedError

    def create(self, *, staff_id: str, day_of_week: int, time_slot: TimeSlot) -> StaffAvailability:
        raise NotImplementedError

    def delete(self, availability_id: str) -> bool:
        raise NotImplementedError
