from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.validators import require_date
from ..common.web import date_arg, json_body, login_required
from ..container import Container

_FIELD_MAP = {
    "fullName": "full_name",
    "email": "email",
    "phone": "phone",
    "subject": "subject",
    "qualification": "qualification",
    "salary": "salary",
    "joinDate": "join_date",
}


def register(app: Flask, container: Container) -> None:
    service = container.teacher_service

    def _fields(data: dict) -> dict:
        return {_FIELD_MAP[k]: v for k, v in data.items() if k in _FIELD_MAP}

    @app.route("/teachers", methods=["GET"], endpoint="teachers_list")
    @login_required
    def teachers_list():
        return jsonify([t.to_record() for t in service.list_teachers(search=request.args.get("search"))])

    @app.route("/teachers", methods=["POST"], endpoint="teachers_create")
    @login_required
    def teachers_create():
        data = json_body()
        fields = _fields(data)
        fields.setdefault("full_name", "")
        fields.setdefault("subject", "")
        fields.setdefault("salary", None)
        return jsonify(service.add_teacher(teacher_id=str(data.get("id") or ""), **fields).to_record()), 201

    @app.route("/teachers/<teacher_id>", methods=["GET"], endpoint="teachers_get")
    @login_required
    def teachers_get(teacher_id: str):
        return jsonify(service.get(teacher_id).to_record())

    @app.route("/teachers/<teacher_id>", methods=["PUT"], endpoint="teachers_update")
    @login_required
    def teachers_update(teacher_id: str):
        return jsonify(service.update_teacher(teacher_id, **_fields(json_body())).to_record())

    @app.route("/teachers/<teacher_id>", methods=["DELETE"], endpoint="teachers_delete")
    @login_required
    def teachers_delete(teacher_id: str):
        service.delete(teacher_id)
        return jsonify({"success": True})

    @app.route("/teachers/attendance", methods=["GET"], endpoint="teachers_attendance")
    @login_required
    def teachers_attendance():
        day = date_arg()
        statuses = service.attendance_for_date(day)
        return jsonify({"date": day.isoformat(), "statuses": {k: v.value for k, v in statuses.items()}})

    @app.route("/teachers/<teacher_id>/attendance", methods=["PUT"], endpoint="teachers_mark_attendance")
    @login_required
    def teachers_mark_attendance(teacher_id: str):
        data = json_body()
        day = require_date(data.get("date"), "Date") if data.get("date") else date_arg()
        record = service.mark_attendance(teacher_id, day, data.get("status"))
        return jsonify(record.to_record())
