from __future__ import annotations

import csv
import io

from flask import Flask, jsonify, request

from ..attendance.aggregator import attendance_band
from ..common.datetime_utils import resolve_range, today_local
from ..common.http import arg_date, as_bool, domain_error_response, fail, login_required
from ..container import Container
from ..core.constants import DEFAULT_HISTORY_MONTHS
from .service import CSV_FIELDS, AttendanceReport, AttendanceReportService


def _report_to_dict(report: AttendanceReport) -> dict:
    return {
        "start": report.start.strftime("%Y-%m-%d"),
        "end": report.end.strftime("%Y-%m-%d"),
        "overall": {
            "individual_count": report.overall.individual_count,
            "average_percentage": report.overall.average_percentage,
            "band": attendance_band(report.overall.average_percentage).value,
            "warning_count": report.overall.warning_count,
        },
        "cohorts": [
            {
                "cohort_key": c.cohort_key,
                "individual_count": c.individual_count,
                "average_percentage": c.average_percentage,
                "band": attendance_band(c.average_percentage).value,
                "warning_count": c.warning_count,
            }
            for c in report.cohorts
        ],
        "individuals": AttendanceReportService.to_csv_rows(report),
    }


def register(app: Flask, container: Container) -> None:
    def _build_from_args() -> AttendanceReport:
        start, end = resolve_range(
            request.args.get("range") or "month",
            today=today_local(),
            start=arg_date("start"),
            end=arg_date("end"),
        )
        return container.report_service.build_report(
            start=start,
            end=end,
            warnings_only=as_bool(request.args.get("warnings_only")),
        )

    @app.route("/api/reports/attendance", methods=["GET"], endpoint="api_attendance_report")
    @login_required
    def api_attendance_report():
        try:
            report = _build_from_args()
        except Exception as e:
            return domain_error_response(e)
        return jsonify({"success": True, "report": _report_to_dict(report)})

    @app.route("/api/reports/attendance.csv", methods=["GET"], endpoint="api_attendance_report_csv")
    @login_required
    def api_attendance_report_csv():
        try:
            report = _build_from_args()
        except Exception as e:
            return domain_error_response(e)

        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=CSV_FIELDS)
        writer.writeheader()
        for row in AttendanceReportService.to_csv_rows(report):
            writer.writerow(row)

        filename = f"attendance_{report.start.strftime('%Y%m%d')}_{report.end.strftime('%Y%m%d')}.csv"
        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/roster/<int:individual_id>/attendance/monthly", methods=["GET"], endpoint="api_monthly_attendance")
    @login_required
    def api_monthly_attendance(individual_id: int):
        try:
            months = int(request.args.get("months") or DEFAULT_HISTORY_MONTHS)
        except ValueError:
            return fail("months must be a number", 400)

        try:
            history = container.report_service.monthly_history(individual_id=individual_id, months=months)
        except Exception as e:
            return domain_error_response(e)

        return jsonify(
            {
                "success": True,
                "months": [
                    {
                        "year": m.year,
                        "month": m.month,
                        "label": m.label,
                        "total_scheduled": m.metrics.total_scheduled,
                        "present": m.metrics.present,
                        "late": m.metrics.late,
                        "absent": m.metrics.absent,
                        "left_early": m.metrics.left_early,
                        "percentage": m.metrics.percentage,
                    }
                    for m in history
                ],
            }
        )
