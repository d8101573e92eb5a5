from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.service import EmployeeService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    employees_repo: MySQLEmployeeRepository
    attendance_repo: MySQLAttendanceRepository

    employee_service: EmployeeService
    attendance_service: AttendanceService

    def close(self) -> None:
        self.conn.close()


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    employees_repo = MySQLEmployeeRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)

    employee_service = EmployeeService(employees_repo)
    attendance_service = AttendanceService(attendance_repo, employees_repo)

    return Container(
        conn=conn,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        employee_service=employee_service,
        attendance_service=attendance_service,
    )
