from __future__ import annotations

from typing import Optional

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, new_id
from .model import Account
from .repository import AccountRepository, RoleRepository


def _to_account(row: dict) -> Account:
    return Account(
        account_id=row["id"],
        email=row["email"],
        password_hash=row["password_hash"],
        display_name=row["display_name"],
        created_at=row.get("created_at"),
    )


class MySQLAccountRepository(AccountRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, account_id: str) -> Optional[Account]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id, email, password_hash, display_name, created_at FROM accounts WHERE id=%s",
                (account_id,),
            )
            row = fetchone(cur)
            return _to_account(row) if row else None

    def get_by_email(self, email: str) -> Optional[Account]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id, email, password_hash, display_name, created_at FROM accounts WHERE email=%s",
                (email,),
            )
            row = fetchone(cur)
            return _to_account(row) if row else None

    def create(self, *, email: str, password_hash: str, display_name: str) -> Account:
        account_id = new_id()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO accounts (id, email, password_hash, display_name) VALUES (%s, %s, %s, %s)",
                (account_id, email, password_hash, display_name),
            )
            cur.execute(
                "SELECT id, email, password_hash, display_name, created_at FROM accounts WHERE id=%s",
                (account_id,),
            )
            return _to_account(fetchone(cur))


class MySQLRoleRepository(RoleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_role(self, account_id: str) -> Optional[Role]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT role FROM user_roles WHERE user_id=%s", (account_id,))
            row = fetchone(cur)
            return Role(row["role"]) if row else None

    def set_role(self, account_id: str, role: Role) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO user_roles (id, user_id, role) VALUES (%s, %s, %s)
                ON DUPLICATE KEY UPDATE role=VALUES(role)
                """,
                (new_id(), account_id, role.value),
            )
