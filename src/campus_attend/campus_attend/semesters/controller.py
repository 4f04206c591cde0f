from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import AuthorizationError, DataUnavailableError, ValidationError
from ..container import Container
from .model import AcademicSemester

logger = logging.getLogger(__name__)


def _to_dict(s: AcademicSemester) -> dict:
    return {
        "id": s.semester_id,
        "name": s.name,
        "start_date": s.start_date.strftime("%Y-%m-%d"),
        "end_date": s.end_date.strftime("%Y-%m-%d"),
        "total_working_days": s.total_working_days,
        "attendance_threshold": s.attendance_threshold,
        "condonation_threshold": s.condonation_threshold,
        "is_current": s.is_current,
    }


def register(app: Flask, container: Container) -> None:
    def admin_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return jsonify({"success": False, "message": "Please sign in to continue"}), 401
            if session.get("role") != Role.ADMIN.value:
                return jsonify({"success": False, "message": "You do not have access to this page"}), 403
            try:
                return view(*args, **kwargs)
            except ValidationError as e:
                return jsonify({"success": False, "message": str(e)}), 400
            except AuthorizationError as e:
                return jsonify({"success": False, "message": str(e)}), 403
            except DataUnavailableError:
                logger.exception("semester data unavailable for %s", request.path)
                return jsonify({"success": False, "message": "Semester data is temporarily unavailable"}), 503

        return wrapper

    @app.route("/api/admin/semesters", methods=["GET"], endpoint="api_admin_semesters")
    @admin_required
    def api_admin_semesters():
        semesters = container.semester_service.list_all(current_role=Role(session.get("role")))
        return jsonify(
            {
                "success": True,
                "semesters": [_to_dict(s) for s in semesters],
                "current_threshold": container.semester_service.current_threshold(),
            }
        )

    @app.route("/api/admin/semesters/<int:semester_id>/current", methods=["POST"], endpoint="api_admin_semester_current")
    @admin_required
    def api_admin_semester_current(semester_id: int):
        container.semester_service.set_current(current_role=Role(session.get("role")), semester_id=semester_id)
        return jsonify({"success": True, "current_semester_id": semester_id})

    @app.route(
        "/api/admin/semesters/<int:semester_id>/thresholds",
        methods=["POST"],
        endpoint="api_admin_semester_thresholds",
    )
    @admin_required
    def api_admin_semester_thresholds(semester_id: int):
        data = request.get_json(silent=True) or {}
        semester = container.semester_service.update_thresholds(
            current_role=Role(session.get("role")),
            semester_id=semester_id,
            attendance_threshold=data.get("attendance_threshold"),
            condonation_threshold=data.get("condonation_threshold"),
        )
        return jsonify({"success": True, "semester": _to_dict(semester)})
