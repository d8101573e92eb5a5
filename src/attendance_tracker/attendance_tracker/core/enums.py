from __future__ import annotations

from enum import Enum


class AttendanceType(str, Enum):
    """Closed set of attendance types stored in `attendance_records.attendance_type`.

    Each member carries whether it belongs to the leave category (multi-day
    submission) and the colour tag the UI uses for its badge.
    """

    WFO = ("WFO", False, "green")
    WFH = ("WFH", False, "blue")
    EMERGENCY_LEAVE = ("Emergency Leave", True, "red")
    SICK_LEAVE = ("Sick Leave", True, "orange")
    PLANNED_LEAVE = ("Planned Leave", True, "purple")
    MATERNITY_LEAVE = ("Maternity Leave", True, "pink")
    PATERNITY_LEAVE = ("Paternity Leave", True, "indigo")
    CASUAL_LEAVE = ("Casual Leave", True, "yellow")
    ANNUAL_LEAVE = ("Annual Leave", True, "teal")
    COMPENSATORY_OFF = ("Compensatory Off", True, "gray")

    def __new__(cls, value: str, is_leave: bool, badge: str):
        obj = str.__new__(cls, value)
        obj._value_ = value
        obj.is_leave = is_leave
        obj.badge = badge
        return obj

    @classmethod
    def labels(cls) -> list[str]:
        return [t.value for t in cls]


class ErrorKind(str, Enum):
    """Machine-readable error kinds returned by the API."""

    MISSING_FIELD = "MissingField"
    INVALID_FIELD = "InvalidField"
    INVALID_RANGE = "InvalidRange"
    NOT_FOUND = "NotFound"
    STORE_UNAVAILABLE = "StoreUnavailable"
    CONSTRAINT_VIOLATION = "ConstraintViolation"
    INTERNAL = "InternalError"
