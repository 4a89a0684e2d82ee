from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, new_id
from .model import Staff
from .repository import StaffRepository

_COLUMNS = "id, name, email, phone, avatar_url, is_active, user_id, created_at, updated_at"
_UPDATABLE = {"name", "email", "phone", "avatar_url", "is_active", "user_id"}


def _to_staff(row: dict) -> Staff:
    return Staff(
        staff_id=row["id"],
        name=row["name"],
        email=row.get("email"),
        phone=row.get("phone"),
        avatar_url=row.get("avatar_url"),
        is_active=bool(row.get("is_active", True)),
        user_id=row.get("user_id"),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


class MySQLStaffRepository(StaffRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Staff]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM staff ORDER BY name")
            return [_to_staff(r) for r in fetchall(cur)]

    def get_by_id(self, staff_id: str) -> Optional[Staff]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM staff WHERE id=%s", (staff_id,))
            row = fetchone(cur)
            return _to_staff(row) if row else None

    def get_by_user_id(self, user_id: str) -> Optional[Staff]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM staff WHERE user_id=%s", (user_id,))
            row = fetchone(cur)
            return _to_staff(row) if row else None

    def create(self, *, name: str, email: Optional[str], phone: Optional[str]) -> Staff:
        staff_id = new_id()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO staff (id, name, email, phone) VALUES (%s, %s, %s, %s)",
                (staff_id, name, email, phone),
            )
            cur.execute(f"SELECT {_COLUMNS} FROM staff WHERE id=%s", (staff_id,))
            return _to_staff(fetchone(cur))

    def update(self, staff_id: str, changes: Mapping[str, Any]) -> Optional[Staff]:
        unknown = set(changes) - _UPDATABLE
        if unknown:
            raise ValueError(f"Unsupported staff columns: {sorted(unknown)}")

        with db_cursor(self._conn_factory) as (_, cur):
            if changes:
                assignments = ", ".join(f"{col}=%s" for col in changes)
                cur.execute(
                    f"UPDATE staff SET {assignments} WHERE id=%s",
                    (*changes.values(), staff_id),
                )
            cur.execute(f"SELECT {_COLUMNS} FROM staff WHERE id=%s", (staff_id,))
            row = fetchone(cur)
            return _to_staff(row) if row else None

    def delete(self, staff_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM staff WHERE id=%s", (staff_id,))
            return cur.rowcount > 0

    def is_referenced(self, staff_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT 1 AS hit FROM session_staff WHERE staff_id=%s LIMIT 1", (staff_id,))
            return fetchone(cur) is not None
