from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository

UPSERT_EMPLOYEE_SQL = """
    INSERT INTO employees(emp_id, name, updated_at)
    VALUES(%s, %s, CURRENT_TIMESTAMP)
    ON DUPLICATE KEY UPDATE name=VALUES(name), updated_at=CURRENT_TIMESTAMP
"""


def _to_employee(r: dict) -> Employee:
    return Employee(
        emp_id=str(r["emp_id"]),
        name=r["name"],
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, emp_id: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT emp_id, name, created_at, updated_at FROM employees WHERE emp_id=%s",
                (emp_id,),
            )
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT emp_id, name, created_at, updated_at FROM employees ORDER BY name ASC")
            return [_to_employee(r) for r in fetchall(cur)]

    def upsert(self, *, emp_id: str, name: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(UPSERT_EMPLOYEE_SQL, (emp_id, name))

    def count(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM employees")
            r = fetchone(cur)
            return int(r["total"]) if r else 0
