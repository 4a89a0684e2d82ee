from __future__ import annotations

from collections import defaultdict
from typing import Optional, Sequence

from ..core.enums import SessionType, TimeSlot
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, new_id
from .model import NewWorkSession, StaffRef, WorkSession
from .repository import WorkSessionRepository

_SELECT_SESSIONS = """
    SELECT id, date, time_slot, product_category, session_type, notes,
           duration_hours, created_by, created_at, updated_at
    FROM work_sessions
"""

_SELECT_STAFF = """
    SELECT ss.session_id, s.id AS staff_id, s.name
    FROM session_staff ss
    JOIN staff s ON s.id = ss.staff_id
"""


class MySQLWorkSessionRepository(WorkSessionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[WorkSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT_SESSIONS + " ORDER BY date DESC, FIELD(time_slot, 'sáng', 'chiều', 'tối')")
            rows = fetchall(cur)
            cur.execute(_SELECT_STAFF + " ORDER BY ss.session_id, ss.position")
            return self._assemble(rows, fetchall(cur))

    def get_by_id(self, session_id: str) -> Optional[WorkSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._load(cur, session_id)

    def create(self, draft: NewWorkSession, *, created_by: Optional[str]) -> WorkSession:
        return self.create_many([draft], created_by=created_by)[0]

    def create_many(self, drafts: Sequence[NewWorkSession], *, created_by: Optional[str]) -> list[WorkSession]:
        # One connection, one commit: a failing insert rolls back the whole batch.
        with db_cursor(self._conn_factory) as (_, cur):
            created: list[WorkSession] = []
            for draft in drafts:
                session_id = new_id()
                cur.execute(
                    """
                    INSERT INTO work_sessions
                        (id, date, time_slot, product_category, session_type, notes, duration_hours, created_by)
                    VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
                    """,
                    (
                        session_id,
                        draft.date,
                        draft.time_slot.value,
                        draft.product_category,
                        draft.session_type.value,
                        draft.notes,
                        draft.duration_hours,
                        created_by,
                    ),
                )
                self._insert_staff(cur, session_id, draft.staff_ids)
                created.append(self._load(cur, session_id))
            return created

    def update(self, session_id: str, draft: NewWorkSession) -> Optional[WorkSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE work_sessions
                SET date=%s, time_slot=%s, product_category=%s, session_type=%s, notes=%s, duration_hours=%s
                WHERE id=%s
                """,
                (
                    draft.date,
                    draft.time_slot.value,
                    draft.product_category,
                    draft.session_type.value,
                    draft.notes,
                    draft.duration_hours,
                    session_id,
                ),
            )
            existing = self._load(cur, session_id)
            if existing is None:
                return None

            cur.execute("DELETE FROM session_staff WHERE session_id=%s", (session_id,))
            self._insert_staff(cur, session_id, draft.staff_ids)
            return self._load(cur, session_id)

    def delete(self, session_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM work_sessions WHERE id=%s", (session_id,))
            return cur.rowcount > 0

    @staticmethod
    def _insert_staff(cur, session_id: str, staff_ids: Sequence[str]) -> None:
        cur.executemany(
            "INSERT INTO session_staff (session_id, staff_id, position) VALUES (%s, %s, %s)",
            [(session_id, staff_id, pos) for pos, staff_id in enumerate(staff_ids)],
        )

    def _load(self, cur, session_id: str) -> Optional[WorkSession]:
        cur.execute(_SELECT_SESSIONS + " WHERE id=%s", (session_id,))
        rows = fetchall(cur)
        if not rows:
            return None
        cur.execute(_SELECT_STAFF + " WHERE ss.session_id=%s ORDER BY ss.position", (session_id,))
        return self._assemble(rows, fetchall(cur))[0]

    @staticmethod
    def _assemble(session_rows: list[dict], staff_rows: list[dict]) -> list[WorkSession]:
        staff_by_session: dict[str, list[StaffRef]] = defaultdict(list)
        for r in staff_rows:
            staff_by_session[r["session_id"]].append(StaffRef(staff_id=r["staff_id"], name=r["name"]))

        out: list[WorkSession] = []
        for r in session_rows:
            duration = r.get("duration_hours")
            out.append(
                WorkSession(
                    session_id=r["id"],
                    date=r["date"],
                    time_slot=TimeSlot(r["time_slot"]),
                    product_category=r["product_category"],
                    session_type=SessionType(r["session_type"]),
                    staff=tuple(staff_by_session.get(r["id"], ())),
                    notes=r.get("notes"),
                    duration_hours=float(duration) if duration is not None else None,
                    created_by=r.get("created_by"),
                    created_at=r.get("created_at"),
                    updated_at=r.get("updated_at"),
                )
            )
        return out
