from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..core.constants import DEFAULT_PRODUCT_CATEGORIES
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..users.model import Actor
from .model import Product
from .repository import DuplicateProductName, ProductRepository

logger = logging.getLogger(__name__)


class ProductService:
    """Use case: admin-managed product categories."""

    def __init__(self, products: ProductRepository):
        self._products = products

    def list_products(self) -> Sequence[Product]:
        return self._products.list_all()

    def list_active(self) -> list[Product]:
        return [p for p in self._products.list_all() if p.is_active]

    def category_choices(self) -> list[str]:
        """Names offered by the task form; falls back to the built-in list."""
        names = [p.name for p in self.list_active()]
        return names or list(DEFAULT_PRODUCT_CATEGORIES)

    def add(self, *, actor: Actor, name: str) -> Product:
        self._require_admin(actor)
        name = self._clean_name(name)
        try:
            product = self._products.create(name=name)
        except DuplicateProductName:
            raise ValidationError("Sản phẩm đã tồn tại")
        logger.info("Product added: %s", product.name)
        return product

    def rename(self, *, actor: Actor, product_id: str, name: str) -> Product:
        self._require_admin(actor)
        name = self._clean_name(name)
        try:
            product = self._products.update(product_id, name=name)
        except DuplicateProductName:
            raise ValidationError("Tên sản phẩm đã tồn tại")
        if not product:
            raise NotFoundError("Sản phẩm không tồn tại")
        return product

    def set_active(self, *, actor: Actor, product_id: str, is_active: bool) -> Product:
        self._require_admin(actor)
        product = self._products.update(product_id, is_active=bool(is_active))
        if not product:
            raise NotFoundError("Sản phẩm không tồn tại")
        return product

    def delete(self, *, actor: Actor, product_id: str) -> None:
        self._require_admin(actor)
        if not self._products.delete(product_id):
            raise NotFoundError("Sản phẩm không tồn tại")
        logger.info("Product deleted: %s", product_id)

    @staticmethod
    def _clean_name(name: Optional[str]) -> str:
        if not isinstance(name, str) or not name.strip():
            raise ValidationError("Vui lòng nhập tên sản phẩm")
        return name.strip()

    @staticmethod
    def _require_admin(actor: Actor) -> None:
        if not actor.is_admin:
            raise AuthorizationError("Bạn không có quyền truy cập trang này")
