from __future__ import annotations

from typing import Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    def list_all(self) -> Sequence[Employee]:
        """All employees visible to the caller (the backend scopes managers to their sub-department)."""

        raise NotImplementedError
