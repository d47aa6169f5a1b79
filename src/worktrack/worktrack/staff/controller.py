from __future__ import annotations

from datetime import datetime, time

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.web import current_role, role_required, to_jsonable
from ..core.constants import ANALYTICS_MONTH_PERIOD, ANALYTICS_PRESET_DAYS
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..container import Container
from ..submissions.controller import day_group_json
from ..submissions.model import DateRange


def register(app: Flask, container: Container) -> None:
    tz = container.tz

    def _range_from_args():
        """?from=YYYY-MM-DD&to=YYYY-MM-DD (whole days), ?days=7|30 back from now, or ?period=month."""
        from_s = request.args.get("from")
        to_s = request.args.get("to")
        if from_s or to_s:
            if not (from_s and to_s):
                raise ValidationError("Both from and to are required for a custom range")
            try:
                start = datetime.combine(parse_iso_date(from_s), time.min, tzinfo=tz)
                end = datetime.combine(parse_iso_date(to_s), time.max, tzinfo=tz)
            except ValueError:
                raise ValidationError("Dates must be YYYY-MM-DD")
            return DateRange(start=start, end=end)

        period = request.args.get("period")
        if period:
            if period != ANALYTICS_MONTH_PERIOD:
                raise ValidationError(f"period must be '{ANALYTICS_MONTH_PERIOD}'")
            return container.submission_service.this_month_range()

        days_s = request.args.get("days")
        if days_s:
            if not days_s.isdigit() or int(days_s) not in ANALYTICS_PRESET_DAYS:
                raise ValidationError("days must be one of: " + ", ".join(str(d) for d in ANALYTICS_PRESET_DAYS))
            return container.submission_service.default_range(int(days_s))

        return container.submission_service.default_range(container.analytics_days)

    @app.route("/manager/staff", methods=["GET"], endpoint="manager_staff")
    @role_required(Role.MANAGER)
    def manager_staff():
        staff = container.staff_service.list_staff(current_role=current_role(), query=request.args.get("q", ""))
        return jsonify({"staff": to_jsonable(staff), "count": len(staff)})

    @app.route("/manager/staff/<staff_id>", methods=["GET"], endpoint="manager_staff_detail")
    @role_required(Role.MANAGER)
    def manager_staff_detail(staff_id: str):
        role = current_role()
        member = container.staff_service.get_staff(current_role=role, staff_id=staff_id)
        analytics = container.submission_service.staff_analytics(
            current_role=role,
            staff_id=member.employee_id,
            date_range=_range_from_args(),
        )
        return jsonify({"staff": to_jsonable(member), "analytics": to_jsonable(analytics)})

    @app.route("/admin/staff/<staff_id>", methods=["GET"], endpoint="admin_staff_profile")
    @role_required(Role.ADMIN)
    def admin_staff_profile(staff_id: str):
        profile = container.staff_service.staff_profile(
            current_role=current_role(),
            staff_id=staff_id,
            department_id=request.args.get("departmentId") or None,
            sub_department_id=request.args.get("subDepartmentId") or None,
        )
        days = container.submission_service.overview(profile.submissions).days
        data = to_jsonable(profile)
        data["days"] = [day_group_json(g) for g in days]
        return jsonify(data)
