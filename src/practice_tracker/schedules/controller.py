from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_time_of_day
from ..common.http import as_bool, current_role, domain_error_response, login_required
from ..core.constants import DAYS_OF_WEEK, DEFAULT_PRACTICE_END, DEFAULT_PRACTICE_START
from ..container import Container
from .model import RecurringBlock


def block_to_dict(b: RecurringBlock) -> dict:
    return {
        "id": b.block_id,
        "cohort_key": b.cohort_key,
        "sub_group_key": b.sub_group_key,
        "group_label": b.group_label,
        "weekday": b.weekday,
        "weekday_name": DAYS_OF_WEEK[b.weekday],
        "start_time": b.start_time.strftime("%H:%M"),
        "end_time": b.end_time.strftime("%H:%M"),
        "is_external": b.is_external,
    }


def register(app: Flask, container: Container) -> None:
    def _block_fields(payload: dict) -> dict:
        return {
            "cohort_key": str(payload.get("cohort_key") or ""),
            "sub_group_key": payload.get("sub_group_key"),
            "start_time": parse_time_of_day(str(payload.get("start_time") or DEFAULT_PRACTICE_START)),
            "end_time": parse_time_of_day(str(payload.get("end_time") or DEFAULT_PRACTICE_END)),
            "group_label": payload.get("group_label"),
            "is_external": as_bool(payload.get("is_external")),
        }

    @app.route("/api/schedules", methods=["GET"], endpoint="api_schedules_list")
    @login_required
    def api_schedules_list():
        blocks = container.schedule_service.list_blocks()
        return jsonify({"success": True, "schedules": [block_to_dict(b) for b in blocks]})

    @app.route("/api/schedules", methods=["POST"], endpoint="api_schedules_create")
    @login_required
    def api_schedules_create():
        payload = request.get_json(silent=True) or {}
        try:
            weekdays = payload.get("weekdays")
            if weekdays is None and payload.get("weekday") is not None:
                weekdays = [payload.get("weekday")]

            ids = container.schedule_service.add_blocks(
                current_role=current_role(),
                weekdays=list(weekdays or []),
                **_block_fields(payload),
            )
            return jsonify({"success": True, "ids": ids}), 201
        except Exception as e:
            return domain_error_response(e)

    @app.route("/api/schedules/<int:block_id>", methods=["PUT"], endpoint="api_schedules_update")
    @login_required
    def api_schedules_update(block_id: int):
        payload = request.get_json(silent=True) or {}
        try:
            container.schedule_service.edit_block(
                current_role=current_role(),
                block_id=block_id,
                weekday=payload.get("weekday"),
                **_block_fields(payload),
            )
            return jsonify({"success": True})
        except Exception as e:
            return domain_error_response(e)

    @app.route("/api/schedules/<int:block_id>", methods=["DELETE"], endpoint="api_schedules_delete")
    @login_required
    def api_schedules_delete(block_id: int):
        try:
            container.schedule_service.delete(current_role=current_role(), block_id=block_id)
            return jsonify({"success": True})
        except Exception as e:
            return domain_error_response(e)
