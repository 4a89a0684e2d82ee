from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import month_bounds, now_local
from ..core.enums import SessionType
from ..core.exceptions import ValidationError
from ..sessions.model import WorkSession
from ..sessions.repository import WorkSessionRepository
from ..staff.model import Staff
from ..staff.repository import StaffRepository
from .model import AttendanceReport, AttendanceRow, AttendanceTotals, DashboardStats


def build_attendance(
    sessions: Iterable[WorkSession],
    staff: Sequence[Staff],
    *,
    start: date,
    end: date,
) -> AttendanceReport:
    """Per-staff counters over the inclusive range [start, end].

    Every staff member gets a row, all zeros when nothing is assigned. Rows are
    ordered by total tasks, highest first; ties keep the order of ``staff``.
    """

    in_range = [s for s in sessions if start <= s.date <= end]

    rows: list[AttendanceRow] = []
    for member in staff:
        mine = [s for s in in_range if member.staff_id in s.staff_ids]
        rows.append(
            AttendanceRow(
                staff_id=member.staff_id,
                name=member.name,
                is_active=member.is_active,
                livestream_hours=sum(
                    (s.duration_hours or 0) for s in mine if s.session_type == SessionType.LIVESTREAM
                ),
                video_count=sum(1 for s in mine if s.session_type == SessionType.VIDEO),
                event_count=sum(1 for s in mine if s.session_type == SessionType.EVENT),
                total_tasks=len(mine),
                work_days=len({s.date for s in mine}),
            )
        )

    rows.sort(key=lambda r: r.total_tasks, reverse=True)

    totals = AttendanceTotals(
        livestream_hours=sum(r.livestream_hours for r in rows),
        video=sum(r.video_count for r in rows),
        event=sum(r.event_count for r in rows),
        total=sum(r.total_tasks for r in rows),
    )
    return AttendanceReport(start=start, end=end, rows=rows, totals=totals)


def dashboard_stats(sessions: Sequence[WorkSession]) -> DashboardStats:
    return DashboardStats(
        total_sessions=len(sessions),
        livestream_count=sum(1 for s in sessions if s.session_type == SessionType.LIVESTREAM),
        video_count=sum(1 for s in sessions if s.session_type == SessionType.VIDEO),
        staff_count=len({name for s in sessions for name in s.staff_names}),
    )


class AttendanceReportService:
    def __init__(self, sessions: WorkSessionRepository, staff: StaffRepository):
        self._sessions = sessions
        self._staff = staff

    def build(self, *, start: Optional[date] = None, end: Optional[date] = None) -> AttendanceReport:
        """Defaults to the current calendar month."""

        month_start, month_end = month_bounds(now_local().date())
        start = start or month_start
        end = end or month_end
        if end < start:
            raise ValidationError("Ngày kết thúc phải sau ngày bắt đầu")

        return build_attendance(self._sessions.list_all(), self._staff.list_all(), start=start, end=end)
