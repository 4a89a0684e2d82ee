from __future__ import annotations

from typing import Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key, new_id
from .model import Product
from .repository import DuplicateProductName, ProductRepository

_COLUMNS = "id, name, is_active, created_at, updated_at"


def _to_product(row: dict) -> Product:
    return Product(
        product_id=row["id"],
        name=row["name"],
        is_active=bool(row.get("is_active", True)),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


class MySQLProductRepository(ProductRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Product]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM products ORDER BY name ASC")
            return [_to_product(r) for r in fetchall(cur)]

    def get_by_id(self, product_id: str) -> Optional[Product]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM products WHERE id=%s", (product_id,))
            row = fetchone(cur)
            return _to_product(row) if row else None

    def create(self, *, name: str) -> Product:
        product_id = new_id()
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("INSERT INTO products (id, name) VALUES (%s, %s)", (product_id, name))
                cur.execute(f"SELECT {_COLUMNS} FROM products WHERE id=%s", (product_id,))
                return _to_product(fetchone(cur))
        except IntegrityError as e:
            if is_duplicate_key(e):
                raise DuplicateProductName(name) from e
            raise

    def update(self, product_id: str, *, name: Optional[str] = None, is_active: Optional[bool] = None) -> Optional[Product]:
        sets: list[str] = []
        params: list[object] = []
        if name is not None:
            sets.append("name=%s")
            params.append(name)
        if is_active is not None:
            sets.append("is_active=%s")
            params.append(1 if is_active else 0)

        try:
            with db_cursor(self._conn_factory) as (_, cur):
                if sets:
                    cur.execute(f"UPDATE products SET {', '.join(sets)} WHERE id=%s", (*params, product_id))
                cur.execute(f"SELECT {_COLUMNS} FROM products WHERE id=%s", (product_id,))
                row = fetchone(cur)
                return _to_product(row) if row else None
        except IntegrityError as e:
            if is_duplicate_key(e):
                raise DuplicateProductName(name or "") from e
            raise

    def delete(self, product_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM products WHERE id=%s", (product_id,))
            return cur.rowcount > 0
