from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import today_local
from ..common.http import (
    arg_date,
    body_date,
    body_datetime,
    current_role,
    domain_error_response,
    login_required,
)
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance", methods=["POST"], endpoint="api_attendance_mark")
    @login_required
    def api_attendance_mark():
        payload = request.get_json(silent=True) or {}
        try:
            record_id = container.attendance_service.mark(
                current_role=current_role(),
                individual_id=int(payload.get("individual_id") or 0),
                event_date=body_date(payload, "date"),
                status=str(payload.get("status") or ""),
                notes=payload.get("notes"),
                check_in_time=body_datetime(payload, "check_in_time"),
                check_out_time=body_datetime(payload, "check_out_time"),
            )
            return jsonify({"success": True, "record_id": record_id})
        except Exception as e:
            return domain_error_response(e)

    @app.route("/api/attendance/daily", methods=["GET"], endpoint="api_attendance_daily")
    @login_required
    def api_attendance_daily():
        try:
            day = arg_date("date", today_local())
            sheets = container.attendance_service.daily_sheet(day, cohort_order=container.cohort_order)
        except Exception as e:
            return domain_error_response(e)

        return jsonify(
            {
                "success": True,
                "date": day.strftime("%Y-%m-%d"),
                "cohorts": [
                    {
                        "cohort_key": sheet.cohort_key,
                        "individuals": [
                            {
                                "individual_id": row.attendee.individual.individual_id,
                                "name": row.attendee.individual.display_name or "",
                                "sub_group": row.attendee.individual.effective_sub_group,
                                "expected_start": row.attendee.expected_start.strftime("%H:%M"),
                                "expected_end": row.attendee.expected_end.strftime("%H:%M"),
                                "status": row.event.status.value if row.event else None,
                                "notes": (row.event.notes if row.event else None) or "",
                            }
                            for row in sheet.rows
                        ],
                    }
                    for sheet in sheets
                ],
            }
        )
