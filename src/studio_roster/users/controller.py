from __future__ import annotations

from flask import Flask, session

from ..common.http import actor_required, current_actor, handle_domain_errors, json_body, json_ok
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import ValidationError
from .model import Actor


def actor_json(actor: Actor) -> dict:
    return {
        "account_id": actor.account_id,
        "email": actor.email,
        "display_name": actor.display_name,
        "role": actor.role.value,
        "role_label": actor.role.label,
        "staff_id": actor.staff_id,
        "can_manage": actor.can_manage,
        "is_admin": actor.is_admin,
    }


def register(app: Flask, container: Container) -> None:
    login_required = actor_required(container)
    admin_required = actor_required(container, admin=True)

    def _start_session(actor: Actor, remember: bool) -> None:
        session.clear()
        session.permanent = bool(remember)
        session["account_id"] = actor.account_id

    @app.route("/auth/signup", methods=["POST"], endpoint="signup")
    @handle_domain_errors
    def signup():
        data = json_body()
        actor = container.auth_service.sign_up(
            email=data.get("email", ""),
            password=data.get("password", ""),
            display_name=data.get("display_name", ""),
        )
        _start_session(actor, remember=False)
        return json_ok(201, message="Đăng ký thành công!", account=actor_json(actor))

    @app.route("/auth/login", methods=["POST"], endpoint="login")
    @handle_domain_errors
    def login():
        data = json_body()
        actor = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))
        _start_session(actor, remember=bool(data.get("remember_me")))
        return json_ok(message="Đăng nhập thành công!", account=actor_json(actor))

    @app.route("/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return json_ok(message="Đã đăng xuất hệ thống.")

    @app.route("/auth/me", methods=["GET"], endpoint="me")
    @handle_domain_errors
    @login_required
    def me():
        return json_ok(account=actor_json(current_actor()))

    @app.route("/admin/accounts/<account_id>/role", methods=["PUT"], endpoint="assign_role")
    @handle_domain_errors
    @admin_required
    def assign_role(account_id: str):
        role_s = json_body().get("role", "")
        try:
            role = Role(role_s)
        except ValueError:
            raise ValidationError("Loại tài khoản không hợp lệ")

        container.role_service.assign(actor=current_actor(), account_id=account_id, role=role)
        return json_ok(message="Đã cập nhật quyền", role=role.value)
