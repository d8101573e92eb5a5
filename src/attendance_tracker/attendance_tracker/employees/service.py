from __future__ import annotations

import logging
from typing import Sequence

from ..common.validators import require_non_empty
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


class EmployeeService:
    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def list_employees(self) -> Sequence[Employee]:
        return self._employees.list_all()

    def save(self, *, emp_id: str, name: str) -> Employee:
        emp_id = require_non_empty(emp_id, "id")
        name = require_non_empty(name, "name")

        self._employees.upsert(emp_id=emp_id, name=name)
        logger.info("Saved employee %s", emp_id)
        return self._employees.get_by_id(emp_id) or Employee(emp_id=emp_id, name=name)
