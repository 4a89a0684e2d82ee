"""Task board filtering.

All active predicates are combined with AND. The free-text search matches
if any of the assigned staff names, the product category or the notes
contain the term (case-insensitive). Date bounds are inclusive and compared
as ISO ``YYYY-MM-DD`` strings; an empty bound imposes no constraint.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping

from ..common.datetime_utils import parse_iso_date
from ..core.constants import FILTER_ALL
from ..core.enums import SessionType
from ..core.exceptions import ValidationError
from .model import WorkSession


@dataclass(frozen=True)
class TaskFilter:
    search: str = ""
    staff: str = FILTER_ALL
    session_type: str = FILTER_ALL
    date_from: str = ""
    date_to: str = ""

    @classmethod
    def cleared(cls) -> "TaskFilter":
        return cls()

    @classmethod
    def from_args(cls, args: Mapping[str, str]) -> "TaskFilter":
        """Build a filter from query-string style arguments."""

        session_type = (args.get("session_type") or FILTER_ALL).strip()
        if session_type != FILTER_ALL:
            try:
                SessionType(session_type)
            except ValueError:
                raise ValidationError("Loại phiên không hợp lệ")

        date_from = (args.get("date_from") or "").strip()
        date_to = (args.get("date_to") or "").strip()
        for value in (date_from, date_to):
            if value:
                parse_iso_date(value)

        return cls(
            search=(args.get("search") or "").strip(),
            staff=(args.get("staff") or FILTER_ALL).strip(),
            session_type=session_type,
            date_from=date_from,
            date_to=date_to,
        )

    def is_active(self) -> bool:
        return bool(
            self.search
            or self.staff != FILTER_ALL
            or self.session_type != FILTER_ALL
            or self.date_from
            or self.date_to
        )

    def matches(self, session: WorkSession) -> bool:
        if self.search:
            term = self.search.lower()
            hit = (
                any(term in name.lower() for name in session.staff_names)
                or term in session.product_category.lower()
                or term in (session.notes or "").lower()
            )
            if not hit:
                return False

        if self.staff != FILTER_ALL and self.staff not in session.staff_names:
            return False

        if self.session_type != FILTER_ALL and session.session_type.value != self.session_type:
            return False

        day = session.date.isoformat()
        if self.date_from and day < self.date_from:
            return False
        if self.date_to and day > self.date_to:
            return False

        return True


def filter_sessions(sessions: Iterable[WorkSession], task_filter: TaskFilter) -> list[WorkSession]:
    return [s for s in sessions if task_filter.matches(s)]
