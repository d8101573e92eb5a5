from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_body, pick
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/employees", methods=["GET"], endpoint="api_list_employees")
    def list_employees():
        employees = container.employee_service.list_employees()
        return jsonify([e.to_dict() for e in employees])

    @app.route("/api/employees", methods=["POST"], endpoint="api_save_employee")
    def save_employee():
        data = json_body()
        employee = container.employee_service.save(
            emp_id=pick(data, "id", "emp_id", "employeeId"),
            name=pick(data, "name"),
        )
        return jsonify({"message": "Employee saved successfully", "employee": employee.to_dict()}), 200
