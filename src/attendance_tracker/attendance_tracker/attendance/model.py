from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import format_date
from ..core.enums import AttendanceType


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance entry per (employee, date)."""

    record_id: int
    emp_id: str
    emp_name: str
    attendance_type: AttendanceType
    work_date: date
    recorded_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.record_id,
            "employeeId": self.emp_id,
            "employeeName": self.emp_name,
            "type": self.attendance_type.value,
            "date": format_date(self.work_date),
            "recordedAt": self.recorded_at.isoformat() if self.recorded_at else None,
            "badge": self.attendance_type.badge,
        }


@dataclass(frozen=True)
class AttendanceFilter:
    """Conjunctive filter for listing records. ``None`` means "any"."""

    emp_id: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    attendance_type: Optional[AttendanceType] = None

    def matches(self, r: AttendanceRecord) -> bool:
        if self.emp_id is not None and r.emp_id != self.emp_id:
            return False
        if self.start_date is not None and r.work_date < self.start_date:
            return False
        if self.end_date is not None and r.work_date > self.end_date:
            return False
        if self.attendance_type is not None and r.attendance_type != self.attendance_type:
            return False
        return True


@dataclass(frozen=True)
class AttendanceStats:
    total_employees: int
    total_records: int
    by_type: dict[AttendanceType, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        counts = {t.value: int(self.by_type.get(t, 0)) for t in AttendanceType}
        return {
            "totalEmployees": self.total_employees,
            "totalRecords": self.total_records,
            "wfoRecords": counts[AttendanceType.WFO.value],
            "wfhRecords": counts[AttendanceType.WFH.value],
            "attendanceByType": counts,
        }
