from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import actor_required, handle_domain_errors, json_ok
from ..container import Container
from .export import attendance_csv


def register(app: Flask, container: Container) -> None:
    login_required = actor_required(container)
    service = container.attendance_report_service

    def _report():
        start_s = request.args.get("start")
        end_s = request.args.get("end")
        return service.build(
            start=parse_iso_date(start_s) if start_s else None,
            end=parse_iso_date(end_s) if end_s else None,
        )

    @app.route("/reports/attendance", methods=["GET"], endpoint="attendance_report")
    @handle_domain_errors
    @login_required
    def attendance_report():
        report = _report()
        return json_ok(
            start=report.start.isoformat(),
            end=report.end.isoformat(),
            rows=[r.as_dict() for r in report.rows],
            totals={
                "livestream_hours": report.totals.livestream_hours,
                "video": report.totals.video,
                "event": report.totals.event,
                "total": report.totals.total,
            },
        )

    @app.route("/reports/attendance.csv", methods=["GET"], endpoint="attendance_report_csv")
    @handle_domain_errors
    @login_required
    def attendance_report_csv():
        report = _report()
        filename = f"attendance_{report.start.strftime('%Y%m%d')}_{report.end.strftime('%Y%m%d')}.csv"
        return app.response_class(
            attendance_csv(report),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
