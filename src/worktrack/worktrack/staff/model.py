from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Employee:
    """Domain entity: a dashboard user (admin, manager or staff member)."""

    employee_id: str
    name: Optional[str]
    email: Optional[str]
    role: Optional[Role]
    department_id: Optional[str] = None
    sub_department_id: Optional[str] = None


@dataclass(frozen=True)
class Department:
    department_id: str
    name: str


@dataclass(frozen=True)
class SubDepartment:
    sub_department_id: str
    name: str
    department_id: Optional[str] = None
