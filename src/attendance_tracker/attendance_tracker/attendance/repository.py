from __future__ import annotations

from datetime import date, datetime
from typing import Protocol, Sequence

from ..core.enums import AttendanceType
from .model import AttendanceFilter, AttendanceRecord


class AttendanceRepository(Protocol):
    def upsert_for_date(
        self,
        *,
        emp_id: str,
        emp_name: str,
        attendance_type: AttendanceType,
        work_date: date,
        recorded_at: datetime,
    ) -> int:
        """Ensure the employee row and the (emp_id, work_date) record in one unit of work.

        Overwrites name/type/timestamp when the record exists. Returns the record id.
        """

        raise NotImplementedError

    def list_records(self, criteria: AttendanceFilter) -> Sequence[AttendanceRecord]:
        """Records matching ``criteria``, ordered by date DESC then emp_id ASC."""

        raise NotImplementedError

    def delete(self, record_id: int) -> bool:
        raise NotImplementedError

    def count_by_type(self) -> dict[AttendanceType, int]:
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError
