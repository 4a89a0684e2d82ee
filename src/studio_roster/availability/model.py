from __future__ import annotations

from dataclasses import dataclass, field

from ..core.enums import TimeSlot


@dataclass(frozen=True)
class StaffAvailability:
    """Một buổi nhân viên đăng ký có thể đi làm (day_of_week: 0 = Chủ nhật)."""

    availability_id: str
    staff_id: str
    day_of_week: int
    time_slot: TimeSlot


@dataclass(frozen=True)
class StaffWithAvailability:
    staff_id: str
    name: str
    availability: tuple[StaffAvailability, ...] = field(default_factory=tuple)

    def is_available(self, day_of_week: int, time_slot: TimeSlot) -> bool:
        return any(a.day_of_week == day_of_week and a.time_slot == time_slot for a in self.availability)


@dataclass(frozen=True)
class WeeklyGrid:
    """Weekly registration view: the viewer's own editable row plus read-only rows for the rest."""

    current_staff: StaffWithAvailability | None
    others: tuple[StaffWithAvailability, ...]
