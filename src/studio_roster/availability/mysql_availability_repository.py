from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import TimeSlot
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, new_id
from .model import StaffAvailability
from .repository import AvailabilityRepository


def _to_availability(row: dict) -> StaffAvailability:
    return StaffAvailability(
        availability_id=row["id"],
        staff_id=row["staff_id"],
        day_of_week=int(row["day_of_week"]),
        time_slot=TimeSlot(row["time_slot"]),
    )


class MySQLAvailabilityRepository(AvailabilityRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[StaffAvailability]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, staff_id, day_of_week, time_slot FROM staff_availability")
            return [_to_availability(r) for r in fetchall(cur)]

    def find(self, *, staff_id: str, day_of_week: int, time_slot: TimeSlot) -> Optional[StaffAvailability]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, staff_id, day_of_week, time_slot
                FROM staff_availability
                WHERE staff_id=%s AND day_of_week=%s AND time_slot=%s
                """,
                (staff_id, int(day_of_week), time_slot.value),
            )
            row = fetchone(cur)
            return _to_availability(row) if row else None

    def create(self, *, staff_id: str, day_of_week: int, time_slot: TimeSlot) -> StaffAvailability:
        availability_id = new_id()
        with db_cursor(self._conn_factory) as (_, cur):
            # The unique key keeps one row per (staff, day, slot).
            cur.execute(
                """
                INSERT INTO staff_availability (id, staff_id, day_of_week, time_slot)
                VALUES (%s, %s, %s, %s)
                ON DUPLICATE KEY UPDATE id=id
                """,
                (availability_id, staff_id, int(day_of_week), time_slot.value),
            )
            cur.execute(
                """
                SELECT id, staff_id, day_of_week, time_slot
                FROM staff_availability
                WHERE staff_id=%s AND day_of_week=%s AND time_slot=%s
                """,
                (staff_id, int(day_of_week), time_slot.value),
            )
            return _to_availability(fetchone(cur))

    def delete(self, availability_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM staff_availability WHERE id=%s", (availability_id,))
            return cur.rowcount > 0
