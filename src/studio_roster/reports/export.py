from __future__ import annotations

import csv
import io

from .model import AttendanceReport

CSV_FIELDS = [
    "name",
    "is_active",
    "work_days",
    "livestream_hours",
    "video_count",
    "event_count",
    "total_tasks",
]


def attendance_csv(report: AttendanceReport) -> bytes:
    """Attendance rows as CSV, BOM-prefixed so spreadsheet apps read the Vietnamese names."""

    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=CSV_FIELDS, extrasaction="ignore")
    writer.writeheader()
    for row in report.rows:
        writer.writerow(row.as_dict())
    return out.getvalue().encode("utf-8-sig")
