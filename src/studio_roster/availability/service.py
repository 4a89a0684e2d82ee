from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date
from typing import Optional

from ..common.datetime_utils import day_of_week as weekday_index
from ..common.datetime_utils import now_local
from ..core.enums import TimeSlot
from ..core.exceptions import ValidationError
from ..staff.repository import StaffRepository
from ..users.model import Actor
from .model import StaffAvailability, StaffWithAvailability, WeeklyGrid
from .repository import AvailabilityRepository
from .schedule import TodaySchedule, today_schedule

logger = logging.getLogger(__name__)


class AvailabilityService:
    """Use case: staff register the weekday slots they can work."""

    def __init__(self, availability: AvailabilityRepository, staff: StaffRepository):
        self._availability = availability
        self._staff = staff

    def staff_availability(self) -> list[StaffWithAvailability]:
        """Active staff (name order) with their registered slots."""

        by_staff: dict[str, list[StaffAvailability]] = defaultdict(list)
        for a in self._availability.list_all():
            by_staff[a.staff_id].append(a)

        return [
            StaffWithAvailability(
                staff_id=s.staff_id,
                name=s.name,
                availability=tuple(sorted(by_staff.get(s.staff_id, ()), key=lambda a: (a.day_of_week, a.time_slot.order))),
            )
            for s in self._staff.list_all()
            if s.is_active
        ]

    def grid_for(self, actor: Actor) -> WeeklyGrid:
        rows = self.staff_availability()
        current = next((r for r in rows if actor.staff_id and r.staff_id == actor.staff_id), None)
        others = tuple(r for r in rows if current is None or r.staff_id != current.staff_id)
        return WeeklyGrid(current_staff=current, others=others)

    def toggle(self, *, actor: Actor, staff_id: str, day_of_week: int, time_slot: TimeSlot | str) -> Optional[bool]:
        """Flip one (staff, day, slot) registration.

        Returns the new state (True = available). Only the staff record linked to
        the actor's account is writable; for anyone else this is a no-op returning None.
        """

        slot = self._parse_slot(time_slot)
        day = self._parse_day(day_of_week)

        if not actor.staff_id or actor.staff_id != staff_id:
            logger.info("Ignored availability toggle on %s by account %s", staff_id, actor.account_id)
            return None

        existing = self._availability.find(staff_id=staff_id, day_of_week=day, time_slot=slot)
        if existing:
            self._availability.delete(existing.availability_id)
            return False

        self._availability.create(staff_id=staff_id, day_of_week=day, time_slot=slot)
        return True

    def today(self, on: Optional[date] = None) -> TodaySchedule:
        on = on or now_local().date()
        return today_schedule(self.staff_availability(), weekday_index(on))

    @staticmethod
    def _parse_day(value: int | str) -> int:
        if isinstance(value, str) and value.strip().isdigit():
            value = int(value)
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValidationError("Ngày trong tuần không hợp lệ")
        day = value
        if not 0 <= day <= 6:
            raise ValidationError("Ngày trong tuần không hợp lệ")
        return day

    @staticmethod
    def _parse_slot(value: TimeSlot | str) -> TimeSlot:
        try:
            return TimeSlot(value)
        except ValueError:
            raise ValidationError("Buổi không hợp lệ")
