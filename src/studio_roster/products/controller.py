from __future__ import annotations

from flask import Flask

from ..common.http import actor_required, current_actor, handle_domain_errors, iso, json_body, json_ok
from ..container import Container
from .model import Product


def product_json(p: Product) -> dict:
    return {
        "id": p.product_id,
        "name": p.name,
        "is_active": p.is_active,
        "created_at": iso(p.created_at),
        "updated_at": iso(p.updated_at),
    }


def register(app: Flask, container: Container) -> None:
    login_required = actor_required(container)
    admin_required = actor_required(container, admin=True)
    service = container.product_service

    @app.route("/products/categories", methods=["GET"], endpoint="product_categories")
    @handle_domain_errors
    @login_required
    def product_categories():
        return json_ok(categories=service.category_choices())

    @app.route("/products", methods=["GET"], endpoint="products_list")
    @handle_domain_errors
    @admin_required
    def products_list():
        return json_ok(products=[product_json(p) for p in service.list_products()])

    @app.route("/products", methods=["POST"], endpoint="products_add")
    @handle_domain_errors
    @admin_required
    def products_add():
        product = service.add(actor=current_actor(), name=json_body().get("name", ""))
        return json_ok(201, message="Đã thêm sản phẩm", product=product_json(product))

    @app.route("/products/<product_id>", methods=["PATCH"], endpoint="products_update")
    @handle_domain_errors
    @admin_required
    def products_update(product_id: str):
        data = json_body()
        actor = current_actor()

        product = None
        if "name" in data:
            product = service.rename(actor=actor, product_id=product_id, name=data["name"])
        if "is_active" in data:
            product = service.set_active(actor=actor, product_id=product_id, is_active=bool(data["is_active"]))
        if product is None:
            return json_ok(message="Không có thay đổi", id=product_id)

        return json_ok(message="Đã cập nhật sản phẩm", product=product_json(product))

    @app.route("/products/<product_id>", methods=["DELETE"], endpoint="products_delete")
    @handle_domain_errors
    @admin_required
    def products_delete(product_id: str):
        service.delete(actor=current_actor(), product_id=product_id)
        return json_ok(message="Đã xóa sản phẩm", id=product_id)
