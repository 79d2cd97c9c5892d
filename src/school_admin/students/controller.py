from __future__ import annotations

from dataclasses import asdict

from flask import Flask, jsonify, request

from ..common.web import int_field, json_body, login_required
from ..container import Container

# JSON key -> service keyword
_FIELD_MAP = {
    "id": "student_id",
    "rollNo": "roll_no",
    "fullName": "full_name",
    "gender": "gender",
    "dateOfBirth": "date_of_birth",
    "contactNumber": "contact_number",
    "address": "address",
    "className": "class_name",
    "section": "section",
    "admissionDate": "admission_date",
}


def _fields(data: dict) -> dict:
    out = {_FIELD_MAP[k]: v for k, v in data.items() if k in _FIELD_MAP}
    if out.get("roll_no") not in (None, ""):
        out["roll_no"] = int_field(data, "rollNo", "Roll number")
    else:
        out.pop("roll_no", None)
    return out


def register(app: Flask, container: Container) -> None:
    service = container.student_service

    @app.route("/students", methods=["GET"], endpoint="students_list")
    @login_required
    def students_list():
        students = service.list_students(
            search=request.args.get("search"),
            class_name=request.args.get("class") or None,
            section=request.args.get("section") or None,
        )
        return jsonify([s.to_record() for s in students])

    @app.route("/students/new-credentials", methods=["GET"], endpoint="students_new_credentials")
    @login_required
    def students_new_credentials():
        student_id, roll_no = service.generate_credentials()
        return jsonify({"id": student_id, "rollNo": roll_no})

    @app.route("/students", methods=["POST"], endpoint="students_create")
    @login_required
    def students_create():
        student = service.register(**_fields(json_body()))
        return jsonify(student.to_record()), 201

    @app.route("/students/<student_id>", methods=["GET"], endpoint="students_get")
    @login_required
    def students_get(student_id: str):
        return jsonify(service.get(student_id).to_record())

    @app.route("/students/<student_id>", methods=["PUT"], endpoint="students_update")
    @login_required
    def students_update(student_id: str):
        changes = _fields(json_body())
        changes.pop("student_id", None)
        return jsonify(service.update(student_id, **changes).to_record())

    @app.route("/students/<student_id>", methods=["DELETE"], endpoint="students_delete")
    @login_required
    def students_delete(student_id: str):
        report = service.delete(student_id)
        return jsonify({"success": True, "deleted": asdict(report)})
