from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Sequence

from ..core.enums import AttendanceType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from ..employees.mysql_employee_repository import UPSERT_EMPLOYEE_SQL
from .model import AttendanceFilter, AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=int(r["id"]),
        emp_id=str(r["emp_id"]),
        emp_name=r["emp_name"],
        attendance_type=AttendanceType(r["attendance_type"]),
        work_date=r["date"],
        recorded_at=r.get("timestamp"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def upsert_for_date(
        self,
        *,
        emp_id: str,
        emp_name: str,
        attendance_type: AttendanceType,
        work_date: date,
        recorded_at: datetime,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(UPSERT_EMPLOYEE_SQL, (emp_id, emp_name))
            cur.execute(
                """
                INSERT INTO attendance_records(emp_id, emp_name, attendance_type, date, timestamp)
                VALUES(%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    id=LAST_INSERT_ID(id),
                    emp_name=VALUES(emp_name),
                    attendance_type=VALUES(attendance_type),
                    timestamp=VALUES(timestamp)
                """,
                (emp_id, emp_name, attendance_type.value, work_date, recorded_at),
            )

            if cur.lastrowid:
                return int(cur.lastrowid)

            cur.execute("SELECT id FROM attendance_records WHERE emp_id=%s AND date=%s", (emp_id, work_date))
            r = fetchone(cur)
            return int(r["id"]) if r else 0

    def list_records(self, criteria: AttendanceFilter) -> Sequence[AttendanceRecord]:
        clauses = ["1=1"]
        params: list[object] = []

        if criteria.emp_id is not None:
            clauses.append("emp_id=%s")
            params.append(criteria.emp_id)
        if criteria.start_date is not None:
            clauses.append("date >= %s")
            params.append(criteria.start_date)
        if criteria.end_date is not None:
            clauses.append("date <= %s")
            params.append(criteria.end_date)
        if criteria.attendance_type is not None:
            clauses.append("attendance_type=%s")
            params.append(criteria.attendance_type.value)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT id, emp_id, emp_name, attendance_type, date, timestamp
                FROM attendance_records
                WHERE {where}
                ORDER BY date DESC, emp_id ASC
                """,
                tuple(params),
            )
            out: list[AttendanceRecord] = []
            for r in fetchall(cur):
                try:
                    out.append(_to_record(r))
                except ValueError:
                    logger.warning(
                        "Skipping record %s with unknown attendance_type %r",
                        r.get("id"), r["attendance_type"],
                    )
            return out

    def delete(self, record_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_records WHERE id=%s", (int(record_id),))
            return cur.rowcount > 0

    def count(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM attendance_records")
            r = fetchone(cur)
            return int(r["total"]) if r else 0

    def count_by_type(self) -> dict[AttendanceType, int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT attendance_type, COUNT(*) AS total
                FROM attendance_records
                GROUP BY attendance_type
                """
            )
            out: dict[AttendanceType, int] = {}
            for r in fetchall(cur):
                try:
                    out[AttendanceType(r["attendance_type"])] = int(r["total"])
                except ValueError:
                    logger.warning("Ignoring unknown attendance_type %r in stats", r["attendance_type"])
            return out
