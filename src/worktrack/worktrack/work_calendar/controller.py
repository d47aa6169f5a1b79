from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date, parse_month
from ..common.web import current_role, current_user_id, form_data, role_required, to_jsonable
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..container import Container
from ..submissions.controller import day_group_json


def register(app: Flask, container: Container) -> None:
    def _parse(value, parser, message):
        if not value:
            return None
        try:
            return parser(value)
        except ValueError:
            raise ValidationError(message)

    @app.route("/staff/work-calendar", methods=["GET"], endpoint="staff_work_calendar")
    @role_required(Role.STAFF)
    def staff_work_calendar():
        month = _parse(request.args.get("month"), parse_month, "month must be YYYY-MM")
        selected = _parse(request.args.get("date"), parse_iso_date, "date must be YYYY-MM-DD")

        cal, detail = container.calendar_service.view(current_role=current_role(), month=month, selected=selected)
        return jsonify(
            {
                "month": cal.month.strftime("%Y-%m"),
                "leading_blanks": cal.leading_blanks,
                "days": [
                    {
                        "date": d.work_date.isoformat(),
                        "status": d.status.value,
                        "total_hours": d.total_hours,
                        "lock": d.lock.value,
                        "is_today": d.is_today,
                        "group": day_group_json(d.group) if d.group else None,
                    }
                    for d in cal.days
                ],
                "selected": {
                    "date": detail.work_date.isoformat(),
                    "lock": detail.lock.value,
                    "is_today": detail.is_today,
                    "assignments": to_jsonable(detail.assignments),
                    "unsubmitted": [a.assignment.assignment_id for a in detail.unsubmitted],
                },
            }
        )

    @app.route("/staff/work-calendar/submit", methods=["POST"], endpoint="staff_submit_all")
    @role_required(Role.STAFF)
    def staff_submit_all():
        form = form_data()
        work_date = _parse(form.get("date"), parse_iso_date, "date must be YYYY-MM-DD")
        entries = form.get("entries")
        if not isinstance(entries, dict):
            raise ValidationError("entries must be an object keyed by assignment id")

        created = container.submission_service.submit_all(
            current_role=current_role(),
            user_id=current_user_id(),
            work_date=work_date or container.calendar_service.today(),
            entries=entries,
        )
        return jsonify({"created": to_jsonable(created), "count": len(created)}), 201
