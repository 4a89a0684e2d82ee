from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class AttendanceRow:
    """Read-model: số liệu chấm công của một nhân viên trong khoảng ngày."""

    staff_id: str
    name: str
    is_active: bool
    livestream_hours: float
    video_count: int
    event_count: int
    total_tasks: int
    work_days: int

    def as_dict(self) -> dict:
        return {
            "staff_id": self.staff_id,
            "name": self.name,
            "is_active": self.is_active,
            "livestream_hours": self.livestream_hours,
            "video_count": self.video_count,
            "event_count": self.event_count,
            "total_tasks": self.total_tasks,
            "work_days": self.work_days,
        }


@dataclass(frozen=True)
class AttendanceTotals:
    livestream_hours: float = 0
    video: int = 0
    event: int = 0
    total: int = 0


@dataclass(frozen=True)
class AttendanceReport:
    start: date
    end: date
    rows: list[AttendanceRow]
    totals: AttendanceTotals


@dataclass(frozen=True)
class DashboardStats:
    total_sessions: int
    livestream_count: int
    video_count: int
    staff_count: int
