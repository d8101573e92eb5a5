from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterator

from ..core.constants import DATE_FORMAT
from ..core.exceptions import InvalidRange, ValidationError


def parse_iso_date(value: str, field_name: str = "date") -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(str(value).strip(), DATE_FORMAT).date()
    except ValueError:
        raise ValidationError(f"{field_name} must be YYYY-MM-DD", field=field_name) from None


def format_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


@dataclass(frozen=True)
class DateRange:
    """Inclusive run of calendar days, ascending.

    Iteration is lazy and can be repeated; nothing is materialized up front.
    """

    start: date
    end: date

    def __post_init__(self):
        if self.start > self.end:
            raise InvalidRange(f"From date {format_date(self.start)} is later than to date {format_date(self.end)}")

    def __iter__(self) -> Iterator[date]:
        current = self.start
        while current <= self.end:
            yield current
            current += timedelta(days=1)

    def __len__(self) -> int:
        return (self.end - self.start).days + 1

    def __contains__(self, value: object) -> bool:
        return isinstance(value, date) and self.start <= value <= self.end
