from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.web import as_bool, current_role, current_user_id, form_data, role_required, to_jsonable
from ..core.enums import Role
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/manager/assignments", methods=["GET", "POST"], endpoint="manager_assignments")
    @role_required(Role.MANAGER)
    def manager_assignments():
        if request.method == "POST":
            form = form_data()
            created = container.assignment_service.create(
                current_role=current_role(),
                responsibility_id=form.get("responsibility_id", ""),
                employee_id=form.get("employee_id") or None,
                assign_to_all=as_bool(form.get("assign_to_all")),
            )
            return jsonify({"created": to_jsonable(created), "count": len(created)}), 201

        page_s = request.args.get("page", "1")
        view = container.assignment_service.list_view(
            current_role=current_role(),
            query=request.args.get("q", ""),
            page=int(page_s) if page_s.isdigit() else 1,
        )
        return jsonify(to_jsonable(view))

    @app.route(
        "/manager/assignments/<assignment_id>/reassign",
        methods=["POST"],
        endpoint="reassign_assignment",
    )
    @role_required(Role.MANAGER)
    def reassign_assignment(assignment_id: str):
        form = form_data()
        created = container.assignment_service.reassign(
            current_role=current_role(),
            assignment_id=assignment_id,
            employee_id=form.get("employee_id") or None,
            assign_to_all=as_bool(form.get("assign_to_all")),
        )
        return jsonify({"created": to_jsonable(created), "count": len(created)})

    @app.route(
        "/manager/assignments/<assignment_id>/delete",
        methods=["POST"],
        endpoint="delete_assignment",
    )
    @role_required(Role.MANAGER)
    def delete_assignment(assignment_id: str):
        container.assignment_service.delete(current_role=current_role(), assignment_id=assignment_id)
        return jsonify({"message": "Assignment deleted"})

    @app.route("/staff/responsibilities", methods=["POST"], endpoint="create_responsibility")
    @role_required(Role.STAFF)
    def create_responsibility():
        form = form_data()
        work = form.get("work") if isinstance(form.get("work"), dict) else {
            k: form.get(k, "")
            for k in ("hours_worked", "work_description", "work_proof_type", "work_proof_text", "work_proof_url")
        }
        result = container.assignment_service.create_responsibility(
            current_role=current_role(),
            user_id=current_user_id(),
            sub_department_id=session.get("sub_department_id"),
            title=form.get("title", ""),
            description=form.get("description", ""),
            now=container.clock(),
            work=work,
        )
        return jsonify(to_jsonable(result)), 201
