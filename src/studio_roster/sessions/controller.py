from __future__ import annotations

from typing import Any

from flask import Flask, request

from ..common.http import actor_required, current_actor, handle_domain_errors, iso, json_body, json_ok
from ..container import Container
from ..core.exceptions import ValidationError
from ..reports.service import dashboard_stats
from .display import StaffTaskGroup, flatten_sessions, group_by_staff
from .filters import TaskFilter
from .model import WorkSession

_TASK_FIELDS = ("date", "time_slot", "product_category", "session_type", "staff_ids", "notes", "duration_hours")


def session_json(s: WorkSession) -> dict:
    return {
        "id": s.session_id,
        "date": s.date.isoformat(),
        "time_slot": s.time_slot.value,
        "time_slot_label": s.time_slot.label,
        "product_category": s.product_category,
        "session_type": s.session_type.value,
        "session_type_label": s.session_type.label,
        "notes": s.notes,
        "duration_hours": s.duration_hours,
        "staff_ids": s.staff_ids,
        "staff_names": s.staff_names,
        "created_by": s.created_by,
        "created_at": iso(s.created_at),
        "updated_at": iso(s.updated_at),
    }


def group_json(group: StaffTaskGroup) -> dict:
    return {
        "staff_name": group.staff_name,
        "rows": [
            {
                "session_id": r.task.session_id,
                "staff_id": r.task.staff_id,
                "staff_name": r.task.staff_name,
                "show_name": r.show_name,
                "date": r.task.date.isoformat(),
                "session_type": r.task.session_type.value,
                "product_category": r.task.product_category,
                "time_slot": r.task.time_slot.value,
                "notes": r.task.notes,
                "duration_hours": r.task.duration_hours,
            }
            for r in group.display_rows()
        ],
    }


def _task_fields(data: Any) -> dict:
    if not isinstance(data, dict):
        raise ValidationError("Dữ liệu task không hợp lệ")
    missing = [k for k in ("date", "time_slot", "product_category", "session_type") if not data.get(k)]
    if missing:
        raise ValidationError(f"Thiếu thông tin: {', '.join(missing)}")

    fields = {k: data.get(k) for k in _TASK_FIELDS}
    fields["staff_ids"] = fields["staff_ids"] or []
    return fields


def _numbered(idx: int, data: Any) -> dict:
    try:
        return _task_fields(data)
    except ValidationError as e:
        raise ValidationError(f"Task {idx}: {e}")


def register(app: Flask, container: Container) -> None:
    login_required = actor_required(container)
    manager_required = actor_required(container, manager=True)
    service = container.work_session_service

    @app.route("/sessions", methods=["GET"], endpoint="sessions_board")
    @handle_domain_errors
    @login_required
    def sessions_board():
        task_filter = TaskFilter.from_args(request.args)
        sessions = service.list_sessions(task_filter)
        stats = dashboard_stats(sessions)

        return json_ok(
            filter_active=task_filter.is_active(),
            stats={
                "total_sessions": stats.total_sessions,
                "livestream_count": stats.livestream_count,
                "video_count": stats.video_count,
                "staff_count": stats.staff_count,
            },
            sessions=[session_json(s) for s in sessions],
            groups=[group_json(g) for g in group_by_staff(flatten_sessions(sessions))],
        )

    @app.route("/sessions", methods=["POST"], endpoint="sessions_create")
    @handle_domain_errors
    @manager_required
    def sessions_create():
        data = json_body()
        actor = current_actor()

        if "tasks" in data:
            tasks = data.get("tasks") or []
            if not isinstance(tasks, list):
                raise ValidationError("Danh sách task không hợp lệ")
            created = service.create_many(actor=actor, tasks=[_numbered(idx, t) for idx, t in enumerate(tasks, start=1)])
            return json_ok(201, message=f"Đã phân công {len(created)} task", sessions=[session_json(s) for s in created])

        created_one = service.create(actor=actor, **_task_fields(data))
        return json_ok(201, message="Đã phân công task mới", session=session_json(created_one))

    @app.route("/sessions/<session_id>", methods=["PUT"], endpoint="sessions_update")
    @handle_domain_errors
    @manager_required
    def sessions_update(session_id: str):
        updated = service.update(actor=current_actor(), session_id=session_id, **_task_fields(json_body()))
        return json_ok(message="Task đã được cập nhật", session=session_json(updated))

    @app.route("/sessions/<session_id>", methods=["DELETE"], endpoint="sessions_delete")
    @handle_domain_errors
    @manager_required
    def sessions_delete(session_id: str):
        service.delete(actor=current_actor(), session_id=session_id)
        return json_ok(message="Task đã được xóa", id=session_id)
