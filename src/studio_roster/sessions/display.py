"""Task board rows: one row per (session, staff member), grouped by staff."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from ..core.enums import SessionType, TimeSlot
from .model import WorkSession


@dataclass(frozen=True)
class TaskRow:
    session_id: str
    date: date
    staff_id: str
    staff_name: str
    session_type: SessionType
    product_category: str
    time_slot: TimeSlot
    notes: Optional[str] = None
    duration_hours: Optional[float] = None


@dataclass(frozen=True)
class DisplayRow:
    task: TaskRow
    # Only the first row of a staff group carries the name cell.
    show_name: bool


@dataclass(frozen=True)
class StaffTaskGroup:
    staff_name: str
    rows: tuple[TaskRow, ...]

    def display_rows(self) -> list[DisplayRow]:
        return [DisplayRow(task=row, show_name=(idx == 0)) for idx, row in enumerate(self.rows)]


def flatten_sessions(sessions: Iterable[WorkSession]) -> list[TaskRow]:
    return [
        TaskRow(
            session_id=s.session_id,
            date=s.date,
            staff_id=ref.staff_id,
            staff_name=ref.name,
            session_type=s.session_type,
            product_category=s.product_category,
            time_slot=s.time_slot,
            notes=s.notes,
            duration_hours=s.duration_hours,
        )
        for s in sessions
        for ref in s.staff
    ]


def group_by_staff(rows: Iterable[TaskRow]) -> list[StaffTaskGroup]:
    ordered = sorted(rows, key=lambda r: (r.staff_name.casefold(), r.staff_name, r.time_slot.order))

    groups: list[StaffTaskGroup] = []
    current: list[TaskRow] = []
    for row in ordered:
        if current and current[0].staff_name != row.staff_name:
            groups.append(StaffTaskGroup(staff_name=current[0].staff_name, rows=tuple(current)))
            current = []
        current.append(row)
    if current:
        groups.append(StaffTaskGroup(staff_name=current[0].staff_name, rows=tuple(current)))
    return groups
