from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..api.client import ApiClient
from ..core.enums import Role
from ..submissions.rest_submission_repository import as_id
from .model import Department, Employee, SubDepartment

logger = logging.getLogger(__name__)


def parse_role(value) -> Optional[Role]:
    if value is None:
        return None
    try:
        return Role(str(value).strip().upper())
    except ValueError:
        logger.warning("Ignoring unknown role %r", value)
        return None


def parse_employee(payload: dict) -> Employee:
    return Employee(
        employee_id=str(payload.get("id")),
        name=payload.get("name"),
        email=payload.get("email"),
        role=parse_role(payload.get("role")),
        department_id=as_id(payload.get("departmentId")),
        sub_department_id=as_id(payload.get("subDepartmentId")),
    )


class RestEmployeeRepository:
    def __init__(self, client: ApiClient):
        self._client = client

    def list_all(self) -> Sequence[Employee]:
        return [parse_employee(r) for r in self._client.get("employees") or []]


class RestDepartmentRepository:
    def __init__(self, client: ApiClient):
        self._client = client

    def list_all(self) -> Sequence[Department]:
        return [
            Department(department_id=str(r.get("id")), name=r.get("name") or "")
            for r in self._client.get("departments") or []
        ]


class RestSubDepartmentRepository:
    def __init__(self, client: ApiClient):
        self._client = client

    def list_all(self) -> Sequence[SubDepartment]:
        return [
            SubDepartment(
                sub_department_id=str(r.get("id")),
                name=r.get("name") or "",
                department_id=as_id(r.get("departmentId")),
            )
            for r in self._client.get("sub-departments") or []
        ]
