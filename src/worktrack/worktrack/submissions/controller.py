from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import as_bool, current_role, current_user_id, form_data, role_required, to_jsonable
from ..core.enums import Role
from ..container import Container
from .model import DayGroup


def day_group_json(group: DayGroup) -> dict:
    data = to_jsonable(group)
    data["date"] = group.key
    return data


def register(app: Flask, container: Container) -> None:
    @app.route("/staff/work-submissions", methods=["GET"], endpoint="staff_work_submissions")
    @role_required(Role.STAFF)
    def staff_work_submissions():
        overview = container.submission_service.my_submissions_by_day(current_role=current_role())
        return jsonify(
            {
                "days": [day_group_json(g) for g in overview.days],
                "stats": to_jsonable(overview.stats),
            }
        )

    @app.route("/manager/submissions/<submission_id>/verify", methods=["POST"], endpoint="verify_submission")
    @role_required(Role.MANAGER)
    def verify_submission(submission_id: str):
        form = form_data()
        approved = as_bool(form.get("approved"))
        container.submission_service.verify(
            current_role=current_role(),
            manager_id=current_user_id(),
            submission_id=submission_id,
            approved=approved,
            manager_comment=form.get("manager_comment", ""),
        )
        message = "Submission approved successfully" if approved else "Submission rejected successfully"
        return jsonify({"message": message})
