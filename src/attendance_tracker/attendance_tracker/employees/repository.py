from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    """Repository interface for Employee.

    Services depend on this protocol, not on a concrete database.
    """

    def get_by_id(self, emp_id: str) -> Optional[Employee]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Employee]:
        """All employees, name-ascending."""

        raise NotImplementedError

    def upsert(self, *, emp_id: str, name: str) -> None:
        """Create the employee or overwrite its name."""

        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError
