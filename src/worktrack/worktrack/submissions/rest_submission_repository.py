from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..api.client import ApiClient
from ..common.datetime_utils import parse_timestamp
from ..core.enums import SubmissionStatus, WorkProofType
from ..core.exceptions import ApiError
from .model import AssignmentRef, NewWorkSubmission, WorkSubmission

logger = logging.getLogger(__name__)

RESOURCE = "work-submissions"


def as_id(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


def _as_hours(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        hours = float(value)
    except (TypeError, ValueError):
        logger.warning("Ignoring non-numeric hoursWorked %r", value)
        return None
    return max(hours, 0.0)


def parse_status(value: Any, *, field_name: str) -> Optional[SubmissionStatus]:
    if value is None:
        return None
    status = SubmissionStatus.parse(value)
    if status is None:
        logger.warning("Ignoring unknown %s %r", field_name, value)
    return status


def _as_timestamp(payload: dict, key: str):
    raw = payload.get(key)
    value = parse_timestamp(raw)
    if raw not in (None, "") and value is None:
        logger.warning("Ignoring unparseable %s %r on submission %s", key, raw, payload.get("id"))
    return value


def parse_assignment_ref(payload: Optional[dict]) -> Optional[AssignmentRef]:
    if not isinstance(payload, dict) or payload.get("id") is None:
        return None
    responsibility = payload.get("responsibility") or {}
    return AssignmentRef(
        assignment_id=str(payload["id"]),
        status=parse_status(payload.get("status"), field_name="assignment.status"),
        responsibility_title=responsibility.get("title"),
    )


def parse_submission(payload: dict) -> WorkSubmission:
    """Map one API payload onto the domain entity."""
    assignment = parse_assignment_ref(payload.get("assignment"))
    proof_type = payload.get("workProofType")

    return WorkSubmission(
        submission_id=str(payload.get("id")),
        staff_id=as_id(payload.get("staffId")),
        assignment_id=as_id(payload.get("assignmentId")) or (assignment.assignment_id if assignment else None),
        work_date=_as_timestamp(payload, "workDate"),
        submitted_at=_as_timestamp(payload, "submittedAt"),
        hours_worked=_as_hours(payload.get("hoursWorked")),
        status=parse_status(payload.get("status"), field_name="status"),
        assignment=assignment,
        staff_comment=payload.get("staffComment"),
        manager_comment=payload.get("managerComment"),
        rejection_reason=payload.get("rejectionReason"),
        verified_at=_as_timestamp(payload, "verifiedAt"),
        work_proof_type=WorkProofType.parse(proof_type) if proof_type else None,
        work_proof_text=payload.get("workProofText"),
        work_proof_url=payload.get("workProofUrl"),
    )


def to_create_payload(submission: NewWorkSubmission) -> dict:
    """Create payload. ``workDate`` is left out so the server decides the day."""
    payload = {
        "assignment": {"connect": {"id": int(submission.assignment_id)}},
        "staff": {"connect": {"id": int(submission.staff_id)}},
        "hoursWorked": float(submission.hours_worked),
        "workProofType": submission.work_proof_type.value,
    }
    if submission.staff_comment:
        payload["staffComment"] = submission.staff_comment
    if submission.work_proof_type == WorkProofType.TEXT:
        if submission.work_proof_text:
            payload["workProofText"] = submission.work_proof_text
    elif submission.work_proof_url:
        payload["workProofUrl"] = submission.work_proof_url
    return payload


class RestWorkSubmissionRepository:
    def __init__(self, client: ApiClient):
        self._client = client

    def list_all(self) -> Sequence[WorkSubmission]:
        rows = self._client.get(RESOURCE) or []
        return [parse_submission(r) for r in rows]

    def create(self, submission: NewWorkSubmission) -> WorkSubmission:
        created = self._client.post(RESOURCE, to_create_payload(submission))
        if not isinstance(created, dict):
            raise ApiError("Work submission was not returned by the server")
        return parse_submission(created)

    def verify(self, *, submission_id: str, approved: bool, manager_comment: Optional[str] = None) -> None:
        payload: dict = {"approved": bool(approved)}
        if manager_comment:
            payload["managerComment"] = manager_comment
        self._client.post(f"{RESOURCE}/{submission_id}/verify", payload)
