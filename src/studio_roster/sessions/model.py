from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import SessionType, TimeSlot


@dataclass(frozen=True)
class StaffRef:
    staff_id: str
    name: str


@dataclass(frozen=True)
class WorkSession:
    """Thực thể miền (domain): một task (livestream / quay video / sự kiện).

    Nhân viên được giữ theo thứ tự phân công.
    """

    session_id: str
    date: date
    time_slot: TimeSlot
    product_category: str
    session_type: SessionType
    staff: tuple[StaffRef, ...]
    notes: Optional[str] = None
    duration_hours: Optional[float] = None
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def staff_ids(self) -> list[str]:
        return [s.staff_id for s in self.staff]

    @property
    def staff_names(self) -> list[str]:
        return [s.name for s in self.staff]


@dataclass(frozen=True)
class NewWorkSession:
    """Validated input for creating or replacing a work session."""

    date: date
    time_slot: TimeSlot
    product_category: str
    session_type: SessionType
    staff_ids: tuple[str, ...]
    notes: Optional[str] = None
    duration_hours: Optional[float] = None
