from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Callable, Optional, Sequence

from ..common.datetime_utils import DateRange, format_date, now_local, parse_iso_date
from ..common.validators import require_attendance_type, require_non_empty
from ..core.constants import CSV_COLUMNS
from ..core.enums import AttendanceType
from ..core.exceptions import DomainError, InvalidRange, NotFound, StoreUnavailable
from ..employees.repository import EmployeeRepository
from .model import AttendanceFilter, AttendanceRecord, AttendanceStats
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttendanceSubmission:
    """Validated request to record attendance for one day or a leave range."""

    emp_id: str
    emp_name: str
    attendance_type: AttendanceType
    from_date: date
    to_date: Optional[date] = None

    @property
    def is_multi_day(self) -> bool:
        return self.attendance_type.is_leave

    def dates(self) -> DateRange:
        if not self.is_multi_day:
            return DateRange(self.from_date, self.from_date)
        return DateRange(self.from_date, self.to_date or self.from_date)


@dataclass(frozen=True)
class DateFailure:
    work_date: date
    error: DomainError

    def to_dict(self) -> dict:
        return {"date": format_date(self.work_date), "error": self.error.kind.value, "message": str(self.error)}


@dataclass
class SubmissionResult:
    requested: int
    succeeded: list[date] = field(default_factory=list)
    record_ids: list[int] = field(default_factory=list)
    failed: list[DateFailure] = field(default_factory=list)
    skipped: list[date] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed and not self.skipped

    @property
    def aborted(self) -> bool:
        return bool(self.skipped) or any(isinstance(f.error, StoreUnavailable) for f in self.failed)

    def to_dict(self) -> dict:
        if self.ok:
            message = (
                f"{self.requested} attendance records added successfully"
                if self.requested > 1
                else "Attendance record added successfully"
            )
        elif self.aborted:
            message = f"Store became unavailable after {len(self.succeeded)} of {self.requested} dates"
        else:
            message = f"{len(self.succeeded)} of {self.requested} dates recorded"

        return {
            "message": message,
            "requested": self.requested,
            "succeeded": [format_date(d) for d in self.succeeded],
            "failed": [f.to_dict() for f in self.failed],
            "skipped": [format_date(d) for d in self.skipped],
            "ids": list(self.record_ids),
        }


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._attendance = attendance
        self._employees = employees
        self._clock = clock

    def build_submission(
        self,
        *,
        emp_id: Any,
        emp_name: Any,
        attendance_type: Any,
        from_date: Any,
        to_date: Any = None,
    ) -> AttendanceSubmission:
        """Validate raw input. Raises before any store call."""

        emp_id = require_non_empty(emp_id, "employeeId")
        emp_name = require_non_empty(emp_name, "employeeName")
        require_non_empty(attendance_type, "type")
        require_non_empty(from_date, "fromDate")

        a_type = require_attendance_type(attendance_type)
        start = from_date if isinstance(from_date, date) else parse_iso_date(from_date, "fromDate")
        end: Optional[date] = None
        if a_type.is_leave and to_date not in (None, ""):
            end = to_date if isinstance(to_date, date) else parse_iso_date(to_date, "toDate")

        submission = AttendanceSubmission(
            emp_id=emp_id,
            emp_name=emp_name,
            attendance_type=a_type,
            from_date=start,
            to_date=end,
        )
        submission.dates()  # InvalidRange for an inverted leave range
        return submission

    def submit(self, submission: AttendanceSubmission) -> SubmissionResult:
        dates = submission.dates()
        result = SubmissionResult(requested=len(dates))

        pending = iter(dates)
        for work_date in pending:
            try:
                record_id = self._attendance.upsert_for_date(
                    emp_id=submission.emp_id,
                    emp_name=submission.emp_name,
                    attendance_type=submission.attendance_type,
                    work_date=work_date,
                    recorded_at=self._clock(),
                )
            except StoreUnavailable as e:
                result.failed.append(DateFailure(work_date, e))
                result.skipped.extend(pending)
                logger.error(
                    "Submission for %s aborted at %s after %d/%d dates: %s",
                    submission.emp_id, format_date(work_date), len(result.succeeded), result.requested, e,
                )
                break
            except DomainError as e:
                result.failed.append(DateFailure(work_date, e))
                logger.error("Attendance for %s on %s failed: %s", submission.emp_id, format_date(work_date), e)
                continue

            result.succeeded.append(work_date)
            result.record_ids.append(record_id)

        if result.ok:
            logger.info(
                "Recorded %s for %s on %d date(s) starting %s",
                submission.attendance_type.value, submission.emp_id, result.requested, format_date(dates.start),
            )
        return result

    def record(self, **fields: Any) -> SubmissionResult:
        return self.submit(self.build_submission(**fields))

    def list_for_employee(self, emp_id: str) -> Sequence[AttendanceRecord]:
        emp_id = require_non_empty(emp_id, "employeeId")
        return self._attendance.list_records(AttendanceFilter(emp_id=emp_id))

    def list_filtered(
        self,
        *,
        emp_id: Optional[str] = None,
        start_date: Optional[str | date] = None,
        end_date: Optional[str | date] = None,
        attendance_type: Optional[str | AttendanceType] = None,
    ) -> Sequence[AttendanceRecord]:
        criteria = self.build_filter(
            emp_id=emp_id, start_date=start_date, end_date=end_date, attendance_type=attendance_type
        )
        return self._attendance.list_records(criteria)

    def list_range(self, *, emp_id: str, start_date: str | date, end_date: str | date) -> Sequence[AttendanceRecord]:
        require_non_empty(emp_id, "employeeId")
        require_non_empty(start_date, "startDate")
        require_non_empty(end_date, "endDate")
        return self.list_filtered(emp_id=emp_id, start_date=start_date, end_date=end_date)

    def build_filter(
        self,
        *,
        emp_id: Optional[str] = None,
        start_date: Optional[str | date] = None,
        end_date: Optional[str | date] = None,
        attendance_type: Optional[str | AttendanceType] = None,
    ) -> AttendanceFilter:
        start = _optional_date(start_date, "startDate")
        end = _optional_date(end_date, "endDate")
        if start and end and start > end:
            raise InvalidRange(f"startDate {format_date(start)} is later than endDate {format_date(end)}")

        emp_id = emp_id.strip() if isinstance(emp_id, str) else emp_id
        return AttendanceFilter(
            emp_id=emp_id or None,
            start_date=start,
            end_date=end,
            attendance_type=require_attendance_type(attendance_type) if attendance_type else None,
        )

    def delete(self, record_id: int) -> None:
        if not self._attendance.delete(int(record_id)):
            raise NotFound(f"Attendance record {record_id} not found")
        logger.info("Deleted attendance record %s", record_id)

    def get_stats(self) -> AttendanceStats:
        return AttendanceStats(
            total_employees=self._employees.count(),
            total_records=self._attendance.count(),
            by_type=self._attendance.count_by_type(),
        )

    def csv_rows(self, records: Sequence[AttendanceRecord]) -> list[dict]:
        """Rows keyed by the CSV column headers, in listing order."""

        return [
            {
                CSV_COLUMNS["employee_id"]: r.emp_id,
                CSV_COLUMNS["employee_name"]: r.emp_name,
                CSV_COLUMNS["attendance_type"]: r.attendance_type.value,
                CSV_COLUMNS["date"]: format_date(r.work_date),
            }
            for r in records
        ]


def _optional_date(value: Optional[str | date], field_name: str) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    return parse_iso_date(value, field_name)
