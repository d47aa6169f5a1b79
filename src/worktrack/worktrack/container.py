from __future__ import annotations

from dataclasses import dataclass
from datetime import tzinfo
from typing import Optional

import requests

from .api.client import ApiClient, ApiConfig
from .assignments.rest_assignment_repository import RestAssignmentRepository, RestResponsibilityRepository
from .assignments.service import AssignmentService
from .common.datetime_utils import Clock, get_timezone, system_clock
from .core.constants import DEFAULT_ANALYTICS_DAYS, DEFAULT_API_TIMEOUT, DEFAULT_API_WORKERS
from .staff.rest_staff_repository import (
    RestDepartmentRepository,
    RestEmployeeRepository,
    RestSubDepartmentRepository,
)
from .staff.service import StaffService
from .submissions.rest_submission_repository import RestWorkSubmissionRepository
from .submissions.service import WorkSubmissionService
from .work_calendar.service import WorkCalendarService


@dataclass(frozen=True)
class Container:
    client: ApiClient
    tz: tzinfo
    clock: Clock
    analytics_days: int

    submissions_repo: RestWorkSubmissionRepository
    assignments_repo: RestAssignmentRepository
    responsibilities_repo: RestResponsibilityRepository
    employees_repo: RestEmployeeRepository
    departments_repo: RestDepartmentRepository
    sub_departments_repo: RestSubDepartmentRepository

    submission_service: WorkSubmissionService
    assignment_service: AssignmentService
    staff_service: StaffService
    calendar_service: WorkCalendarService


def build_container(
    *,
    api_config: dict,
    timezone: Optional[str] = None,
    analytics_days: int = DEFAULT_ANALYTICS_DAYS,
    clock: Optional[Clock] = None,
    session: Optional[requests.Session] = None,
) -> Container:
    config = ApiConfig(
        base_url=str(api_config["base_url"]),
        token=api_config.get("token") or None,
        timeout=float(api_config.get("timeout", DEFAULT_API_TIMEOUT)),
        max_workers=int(api_config.get("max_workers", DEFAULT_API_WORKERS)),
    )
    client = ApiClient(config, session=session)
    tz = get_timezone(timezone)
    clock = clock or system_clock(tz)

    submissions_repo = RestWorkSubmissionRepository(client)
    assignments_repo = RestAssignmentRepository(client)
    responsibilities_repo = RestResponsibilityRepository(client)
    employees_repo = RestEmployeeRepository(client)
    departments_repo = RestDepartmentRepository(client)
    sub_departments_repo = RestSubDepartmentRepository(client)

    submission_service = WorkSubmissionService(submissions_repo, tz=tz, clock=clock)
    assignment_service = AssignmentService(
        assignments_repo,
        responsibilities_repo,
        employees_repo,
        submission_service,
        gather=client.fetch_all,
    )
    staff_service = StaffService(
        employees_repo,
        departments_repo,
        sub_departments_repo,
        assignments_repo,
        submissions_repo,
        gather=client.fetch_all,
    )
    calendar_service = WorkCalendarService(
        assignments_repo,
        submissions_repo,
        tz=tz,
        clock=clock,
        gather=client.fetch_all,
    )

    return Container(
        client=client,
        tz=tz,
        clock=clock,
        analytics_days=int(analytics_days),
        submissions_repo=submissions_repo,
        assignments_repo=assignments_repo,
        responsibilities_repo=responsibilities_repo,
        employees_repo=employees_repo,
        departments_repo=departments_repo,
        sub_departments_repo=sub_departments_repo,
        submission_service=submission_service,
        assignment_service=assignment_service,
        staff_service=staff_service,
        calendar_service=calendar_service,
    )
