from __future__ import annotations

import io

from flask import Flask, jsonify, request, send_file

from ..common.validators import require_choice, require_date
from ..common.web import int_field, json_body, login_required
from ..container import Container
from ..core.enums import FeeStatus
from .receipt import build_receipt, render_receipt_qr


def register(app: Flask, container: Container) -> None:
    service = container.fee_service

    @app.route("/fees", methods=["GET"], endpoint="fees_list")
    @login_required
    def fees_list():
        raw = (request.args.get("status") or "ALL").upper()
        status_filter = None if raw == "ALL" else require_choice(FeeStatus, raw, "Status filter")
        rows = service.list_student_fees(
            academic_year=request.args.get("year"),
            search=request.args.get("search"),
            status_filter=status_filter,
        )
        return jsonify(
            {
                "academicYear": request.args.get("year") or service.academic_year,
                "semesterFee": service.semester_fee,
                "rows": [r.to_dict() for r in rows],
            }
        )

    @app.route("/fees/summary", methods=["GET"], endpoint="fees_summary")
    @login_required
    def fees_summary():
        return jsonify(service.summary(request.args.get("year")).to_dict())

    @app.route("/fees/<student_id>", methods=["GET"], endpoint="fees_for_student")
    @login_required
    def fees_for_student(student_id: str):
        return jsonify(service.student_fees(student_id, request.args.get("year")).to_dict())

    @app.route("/fees/<student_id>/payments", methods=["POST"], endpoint="fees_collect")
    @login_required
    def fees_collect(student_id: str):
        data = json_body()
        record, txn = service.collect_payment(
            student_id=student_id,
            semester=int_field(data, "semester", "Semester"),
            amount=data.get("amount"),
            payment_date=require_date(data["date"], "Date") if data.get("date") else None,
            mode=data.get("mode") or "CASH",
            transaction_id=data.get("transactionId"),
            academic_year=data.get("academicYear"),
        )
        student = container.student_service.get(student_id)
        return (
            jsonify(
                {
                    "success": True,
                    "fees": service.student_fees(student_id, record.academic_year).to_dict(),
                    "receipt": build_receipt(student, record, txn).to_dict(),
                }
            ),
            201,
        )

    @app.route("/fees/receipts/<transaction_id>", methods=["GET"], endpoint="fees_receipt")
    @login_required
    def fees_receipt(transaction_id: str):
        return jsonify(service.get_receipt(transaction_id).to_dict())

    @app.route("/fees/receipts/<transaction_id>/qr.png", methods=["GET"], endpoint="fees_receipt_qr")
    @login_required
    def fees_receipt_qr(transaction_id: str):
        receipt = service.get_receipt(transaction_id)
        return send_file(io.BytesIO(render_receipt_qr(receipt)), mimetype="image/png")
