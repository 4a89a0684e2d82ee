from __future__ import annotations

from flask import Flask, request

from ..common.http import actor_required, current_actor, handle_domain_errors, iso, json_body, json_ok
from ..container import Container
from .model import Staff, StaffRemoval


def staff_json(s: Staff) -> dict:
    return {
        "id": s.staff_id,
        "name": s.name,
        "email": s.email,
        "phone": s.phone,
        "avatar_url": s.avatar_url,
        "is_active": s.is_active,
        "user_id": s.user_id,
        "created_at": iso(s.created_at),
        "updated_at": iso(s.updated_at),
    }


def register(app: Flask, container: Container) -> None:
    login_required = actor_required(container)
    manager_required = actor_required(container, manager=True)
    service = container.staff_service

    @app.route("/staff", methods=["GET"], endpoint="staff_list")
    @handle_domain_errors
    @login_required
    def staff_list():
        only_active = request.args.get("active") in {"1", "true"}
        items = service.list_active() if only_active else service.list_staff()
        return json_ok(staff=[staff_json(s) for s in items])

    @app.route("/staff", methods=["POST"], endpoint="staff_add")
    @handle_domain_errors
    @manager_required
    def staff_add():
        data = json_body()
        staff = service.add(
            actor=current_actor(),
            name=data.get("name", ""),
            email=data.get("email"),
            phone=data.get("phone"),
        )
        return json_ok(201, message="Đã thêm nhân viên mới", staff=staff_json(staff))

    @app.route("/staff/<staff_id>", methods=["PATCH"], endpoint="staff_update")
    @handle_domain_errors
    @manager_required
    def staff_update(staff_id: str):
        data = json_body()

        optional = {k: data[k] for k in ("email", "phone", "avatar_url", "is_active", "user_id") if k in data}
        staff = service.patch(actor=current_actor(), staff_id=staff_id, name=data.get("name"), **optional)

        return json_ok(message="Đã cập nhật thông tin nhân viên", staff=staff_json(staff))

    @app.route("/staff/<staff_id>", methods=["DELETE"], endpoint="staff_delete")
    @handle_domain_errors
    @manager_required
    def staff_delete(staff_id: str):
        result = service.remove(actor=current_actor(), staff_id=staff_id)
        message = "Đã xóa nhân viên" if result == StaffRemoval.DELETED else "Nhân viên đã có task, đã chuyển sang nghỉ việc"
        return json_ok(message=message, result=result.value, id=staff_id)
