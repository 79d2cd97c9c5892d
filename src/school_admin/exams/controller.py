from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import json_body, login_required
from ..container import Container
from ..core.constants import SUBJECTS
from ..core.enums import ExamType
from ..core.exceptions import ValidationError
from .service import grade_for


def register(app: Flask, container: Container) -> None:
    service = container.exam_service

    @app.route("/exams/subjects", methods=["GET"], endpoint="exams_subjects")
    @login_required
    def exams_subjects():
        return jsonify({"subjects": list(SUBJECTS), "examTypes": [t.value for t in ExamType]})

    @app.route("/exams", methods=["GET"], endpoint="exams_results")
    @login_required
    def exams_results():
        exam_type = request.args.get("examType", ExamType.MID_TERM.value)
        subject = request.args.get("subject", SUBJECTS[0])
        results = service.results_for(exam_type, subject)
        return jsonify(
            {
                "examType": exam_type,
                "subject": subject,
                "results": {sid: {"marks": m, "grade": grade_for(m)} for sid, m in results.items()},
            }
        )

    @app.route("/exams", methods=["PUT"], endpoint="exams_save")
    @login_required
    def exams_save():
        data = json_body()
        marks = data.get("marks")
        if not isinstance(marks, dict):
            raise ValidationError("marks must map student ids to scores")
        saved = service.record_many(data.get("examType"), data.get("subject"), marks)
        return jsonify({"success": True, "saved": len(saved)})

    @app.route("/exams/students/<student_id>", methods=["GET"], endpoint="exams_for_student")
    @login_required
    def exams_for_student(student_id: str):
        container.student_service.get(student_id)
        return jsonify([r.to_record() for r in service.results_for_student(student_id)])
