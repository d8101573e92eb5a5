from __future__ import annotations

import csv
import io

from flask import Flask, jsonify, request

from ..common.http import json_body, pick, status_for
from ..core.constants import CSV_COLUMNS, CSV_FILENAME
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    def _records_json(records):
        return jsonify([r.to_dict() for r in records])

    def _filtered_from_args():
        return service.list_filtered(
            emp_id=request.args.get("employee_id") or request.args.get("employeeId"),
            start_date=request.args.get("start_date"),
            end_date=request.args.get("end_date"),
            attendance_type=request.args.get("attendance_type"),
        )

    @app.route("/api/attendance", methods=["POST"], endpoint="api_add_attendance")
    def add_attendance():
        data = json_body()
        from_date = pick(data, "fromDate", "from_date", "date")
        submission = service.build_submission(
            emp_id=pick(data, "employeeId", "emp_id"),
            emp_name=pick(data, "employeeName", "emp_name"),
            attendance_type=pick(data, "type", "attendance_type"),
            from_date=from_date,
            to_date=pick(data, "toDate", "to_date") or from_date,
        )
        result = service.submit(submission)

        if not result.succeeded and result.failed:
            if result.requested == 1 or result.aborted:
                # Nothing landed: report the first failure like any other error.
                raise result.failed[0].error
            # Every date failed on its own: keep the per-date detail.
            return jsonify(result.to_dict()), status_for(result.failed[0].error)

        return jsonify(result.to_dict()), (201 if result.ok else 207)

    @app.route("/api/attendance", methods=["GET"], endpoint="api_list_attendance")
    def list_attendance():
        return _records_json(_filtered_from_args())

    @app.route("/api/attendance/export.csv", methods=["GET"], endpoint="api_export_attendance_csv")
    def export_attendance_csv():
        records = _filtered_from_args()

        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=list(CSV_COLUMNS.values()))
        writer.writeheader()
        for row in service.csv_rows(records):
            writer.writerow(row)

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={CSV_FILENAME}"},
        )

    @app.route("/api/attendance/<emp_id>", methods=["GET"], endpoint="api_employee_attendance")
    def employee_attendance(emp_id: str):
        return _records_json(service.list_for_employee(emp_id))

    @app.route(
        "/api/attendance-range/<emp_id>/<start_date>/<end_date>",
        methods=["GET"],
        endpoint="api_employee_attendance_range",
    )
    def employee_attendance_range(emp_id: str, start_date: str, end_date: str):
        return _records_json(service.list_range(emp_id=emp_id, start_date=start_date, end_date=end_date))

    @app.route("/api/attendance/<int:record_id>", methods=["DELETE"], endpoint="api_delete_attendance")
    def delete_attendance(record_id: int):
        service.delete(record_id)
        return jsonify({"message": "Record deleted successfully", "id": record_id})

    @app.route("/api/stats", methods=["GET"], endpoint="api_stats")
    def stats():
        return jsonify(service.get_stats().to_dict())
