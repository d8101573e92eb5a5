from __future__ import annotations

from typing import Any

from ..core.enums import AttendanceType
from ..core.exceptions import MissingField, ValidationError


def require_non_empty(value: Any, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise MissingField(f"{field_name} is required", field=field_name)
    return str(value).strip()


def require_attendance_type(value: Any, field_name: str = "type") -> AttendanceType:
    if isinstance(value, AttendanceType):
        return value
    label = require_non_empty(value, field_name)
    try:
        return AttendanceType(label)
    except ValueError:
        raise ValidationError(
            f"Invalid {field_name}: {label}. Expected one of: {', '.join(AttendanceType.labels())}",
            field=field_name,
        ) from None
