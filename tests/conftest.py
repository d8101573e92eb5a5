from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional

import pytest

from attendance_tracker.attendance.model import AttendanceFilter, AttendanceRecord
from attendance_tracker.attendance.service import AttendanceService
from attendance_tracker.core.enums import AttendanceType
from attendance_tracker.employees.model import Employee
from attendance_tracker.employees.service import EmployeeService


class InMemoryEmployees:
    def __init__(self):
        self._by_id: dict[str, Employee] = {}

    def get_by_id(self, emp_id: str) -> Optional[Employee]:
        return self._by_id.get(emp_id)

    def list_all(self):
        return sorted(self._by_id.values(), key=lambda e: e.name)

    def upsert(self, *, emp_id: str, name: str) -> None:
        existing = self._by_id.get(emp_id)
        self._by_id[emp_id] = Employee(
            emp_id=emp_id,
            name=name,
            created_at=existing.created_at if existing else datetime(2024, 1, 1, 9, 0),
            updated_at=datetime(2024, 1, 1, 9, 0),
        )

    def count(self) -> int:
        return len(self._by_id)


class InMemoryAttendance:
    """Mirrors the MySQL repository: one row per (emp_id, date), employee ensured alongside."""

    def __init__(self, employees: InMemoryEmployees):
        self._employees = employees
        self._by_emp_date: dict[tuple[str, date], AttendanceRecord] = {}
        self._id = 0
        self.fail_on: dict[date, Exception] = {}

    def upsert_for_date(self, *, emp_id, emp_name, attendance_type, work_date, recorded_at) -> int:
        if work_date in self.fail_on:
            raise self.fail_on[work_date]

        self._employees.upsert(emp_id=emp_id, name=emp_name)
        existing = self._by_emp_date.get((emp_id, work_date))
        if existing:
            record_id = existing.record_id
        else:
            self._id += 1
            record_id = self._id

        self._by_emp_date[(emp_id, work_date)] = AttendanceRecord(
            record_id=record_id,
            emp_id=emp_id,
            emp_name=emp_name,
            attendance_type=attendance_type,
            work_date=work_date,
            recorded_at=recorded_at,
        )
        return record_id

    def list_records(self, criteria: AttendanceFilter):
        items = [r for r in self._by_emp_date.values() if criteria.matches(r)]
        items.sort(key=lambda r: r.emp_id)
        items.sort(key=lambda r: r.work_date, reverse=True)
        return items

    def delete(self, record_id: int) -> bool:
        for k, v in list(self._by_emp_date.items()):
            if v.record_id == record_id:
                del self._by_emp_date[k]
                return True
        return False

    def count(self) -> int:
        return len(self._by_emp_date)

    def count_by_type(self) -> dict[AttendanceType, int]:
        out: dict[AttendanceType, int] = {}
        for r in self._by_emp_date.values():
            out[r.attendance_type] = out.get(r.attendance_type, 0) + 1
        return out


class TickingClock:
    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        self.now += timedelta(seconds=1)
        return self.now


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 1, 10, 9, 0, 0)


@pytest.fixture
def employees_repo() -> InMemoryEmployees:
    return InMemoryEmployees()


@pytest.fixture
def attendance_repo(employees_repo) -> InMemoryAttendance:
    return InMemoryAttendance(employees_repo)


@pytest.fixture
def clock(fixed_now) -> TickingClock:
    return TickingClock(fixed_now)


@pytest.fixture
def attendance_service(attendance_repo, employees_repo, clock) -> AttendanceService:
    return AttendanceService(attendance_repo, employees_repo, clock=clock)


@pytest.fixture
def employee_service(employees_repo) -> EmployeeService:
    return EmployeeService(employees_repo)
