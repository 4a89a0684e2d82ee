from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Product


class DuplicateProductName(Exception):
    """Raised by repositories when the unique product name is violated."""


class ProductRepository(Protocol):
    def list_all(self) -> Sequence[Product]:
        """All products ordered by name."""

        raise NotImplementedError

    def get_by_id(self, product_id: str) -> Optional[Product]:
        raise NotImplementedError

    def create(self, *, name: str) -> Product:
        """Raises DuplicateProductName when the name is taken."""

        raise NotImplementedError

    def update(self, product_id: str, *, name: Optional[str] = None, is_active: Optional[bool] = None) -> Optional[Product]:
        """Raises DuplicateProductName when renaming onto an existing name."""

        raise NotImplementedError

    def delete(self, product_id: str) -> bool:
        raise NotImplementedError
