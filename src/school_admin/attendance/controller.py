from __future__ import annotations

from flask import Flask, jsonify

from ..common.validators import require_date
from ..common.web import date_arg, json_body, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    def _day(data: dict):
        return require_date(data.get("date"), "Date") if data.get("date") else date_arg()

    @app.route("/attendance", methods=["GET"], endpoint="attendance_for_date")
    @login_required
    def attendance_for_date():
        day = date_arg()
        statuses = service.statuses_for_date(day)
        return jsonify({"date": day.isoformat(), "statuses": {k: v.value for k, v in statuses.items()}})

    @app.route("/attendance/<student_id>", methods=["PUT"], endpoint="attendance_mark")
    @login_required
    def attendance_mark(student_id: str):
        data = json_body()
        record = service.mark(student_id, _day(data), data.get("status"))
        return jsonify(record.to_record())

    @app.route("/attendance/mark-all", methods=["POST"], endpoint="attendance_mark_all")
    @login_required
    def attendance_mark_all():
        data = json_body()
        day = _day(data)
        count = service.mark_all(day, data.get("status"))
        return jsonify({"success": True, "date": day.isoformat(), "marked": count})

    @app.route("/attendance/summary", methods=["GET"], endpoint="attendance_summary")
    @login_required
    def attendance_summary():
        return jsonify(service.summarize().to_dict())

    @app.route("/attendance/students/<student_id>", methods=["GET"], endpoint="attendance_for_student")
    @login_required
    def attendance_for_student(student_id: str):
        container.student_service.get(student_id)
        return jsonify([r.to_record() for r in service.records_for_student(student_id)])
