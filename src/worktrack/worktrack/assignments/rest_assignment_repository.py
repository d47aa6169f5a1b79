from __future__ import annotations

from typing import Optional, Sequence

from ..api.client import ApiClient
from ..core.exceptions import ApiError
from ..staff.rest_staff_repository import parse_employee
from ..submissions.rest_submission_repository import as_id, parse_status, parse_submission
from .model import Assignment, CreatedResponsibility, NewResponsibility, Responsibility


def parse_responsibility(payload: Optional[dict]) -> Optional[Responsibility]:
    if not isinstance(payload, dict) or payload.get("id") is None:
        return None
    return Responsibility(
        responsibility_id=str(payload["id"]),
        title=payload.get("title") or "",
        description=payload.get("description"),
        cycle=payload.get("cycle"),
        sub_department_id=as_id(payload.get("subDepartmentId")),
        is_staff_created=bool(payload.get("isStaffCreated", False)),
    )


def parse_assignment(payload: dict) -> Assignment:
    responsibility = parse_responsibility(payload.get("responsibility"))
    staff = payload.get("staff")
    return Assignment(
        assignment_id=str(payload.get("id")),
        responsibility_id=as_id(payload.get("responsibilityId"))
        or (responsibility.responsibility_id if responsibility else None),
        staff_id=as_id(payload.get("staffId")),
        status=parse_status(payload.get("status"), field_name="assignment.status"),
        responsibility=responsibility,
        staff=parse_employee(staff) if isinstance(staff, dict) else None,
        work_submissions=tuple(parse_submission(s) for s in payload.get("workSubmissions") or []),
    )


class RestAssignmentRepository:
    def __init__(self, client: ApiClient):
        self._client = client

    def list_all(self) -> Sequence[Assignment]:
        return [parse_assignment(r) for r in self._client.get("assignments") or []]

    def create(self, *, responsibility_id: str, staff_id: str) -> Assignment:
        created = self._client.post(
            "assignments",
            {
                "responsibility": {"connect": {"id": int(responsibility_id)}},
                "staff": {"connect": {"id": int(staff_id)}},
            },
        )
        if not isinstance(created, dict):
            raise ApiError("Assignment was not returned by the server")
        return parse_assignment(created)

    def delete(self, *, assignment_id: str) -> None:
        self._client.delete(f"assignments/{assignment_id}")


class RestResponsibilityRepository:
    def __init__(self, client: ApiClient):
        self._client = client

    def list_all(self) -> Sequence[Responsibility]:
        rows = self._client.get("responsibilities") or []
        return [r for r in (parse_responsibility(row) for row in rows) if r is not None]

    def create(self, responsibility: NewResponsibility) -> CreatedResponsibility:
        payload = {
            "title": responsibility.title,
            "cycle": responsibility.cycle,
            "createdBy": {"connect": {"id": int(responsibility.created_by_id)}},
            "subDepartment": {"connect": {"id": int(responsibility.sub_department_id)}},
            "isStaffCreated": responsibility.is_staff_created,
        }
        if responsibility.description:
            payload["description"] = responsibility.description

        created = self._client.post("responsibilities", payload)
        parsed = parse_responsibility(created)
        if parsed is None:
            raise ApiError("Responsibility was not returned by the server")
        return CreatedResponsibility(
            responsibility=parsed,
            assignments=tuple(parse_assignment(a) for a in created.get("assignments") or []),
        )
