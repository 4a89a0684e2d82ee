from __future__ import annotations

from typing import Optional

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import actor_required, current_actor, handle_domain_errors, json_body, json_ok
from ..container import Container
from ..core.constants import DAYS_OF_WEEK
from ..core.enums import TimeSlot
from .model import StaffWithAvailability


def row_json(row: Optional[StaffWithAvailability]) -> Optional[dict]:
    if row is None:
        return None
    return {
        "staff_id": row.staff_id,
        "name": row.name,
        "slots": {
            str(day): {slot.value: row.is_available(day, slot) for slot in TimeSlot}
            for day, _ in DAYS_OF_WEEK
        },
    }


def register(app: Flask, container: Container) -> None:
    login_required = actor_required(container)
    service = container.availability_service

    @app.route("/availability", methods=["GET"], endpoint="availability_grid")
    @handle_domain_errors
    @login_required
    def availability_grid():
        grid = service.grid_for(current_actor())
        return json_ok(
            days=[{"value": day, "label": label} for day, label in DAYS_OF_WEEK],
            time_slots=[{"value": s.value, "label": s.label} for s in TimeSlot],
            current_staff=row_json(grid.current_staff),
            others=[row_json(r) for r in grid.others],
        )

    @app.route("/availability/toggle", methods=["POST"], endpoint="availability_toggle")
    @handle_domain_errors
    @login_required
    def availability_toggle():
        data = json_body()
        state = service.toggle(
            actor=current_actor(),
            staff_id=data.get("staff_id", ""),
            day_of_week=data.get("day_of_week"),
            time_slot=data.get("time_slot", ""),
        )
        return json_ok(changed=state is not None, available=state)

    @app.route("/availability/today", methods=["GET"], endpoint="availability_today")
    @handle_domain_errors
    @login_required
    def availability_today():
        on = request.args.get("date")
        schedule = service.today(parse_iso_date(on) if on else None)
        return json_ok(
            day_of_week=schedule.day_of_week,
            has_any_staff=schedule.has_any_staff,
            slots=[
                {"time_slot": s.time_slot.value, "label": s.time_slot.label, "staff_names": list(s.staff_names)}
                for s in schedule.slots
            ],
        )
