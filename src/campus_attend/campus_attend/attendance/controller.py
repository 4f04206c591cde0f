from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify, request, session

from ..core.constants import DEFAULT_RECENT_LIMIT
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, DataUnavailableError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def role_required(*roles: Role):
        allowed = {r.value for r in roles}

        def decorator(view):
            @wraps(view)
            def wrapper(*args, **kwargs):
                if "user_id" not in session:
                    return jsonify({"success": False, "message": "Please sign in to continue"}), 401
                if session.get("role") not in allowed:
                    return jsonify({"success": False, "message": "You do not have access to this page"}), 403
                try:
                    return view(*args, **kwargs)
                except ValidationError as e:
                    return jsonify({"success": False, "message": str(e)}), 400
                except AuthorizationError as e:
                    return jsonify({"success": False, "message": str(e)}), 403
                except DataUnavailableError:
                    logger.exception("attendance data unavailable for %s", request.path)
                    return jsonify({"success": False, "message": "Attendance data is temporarily unavailable"}), 503

            return wrapper

        return decorator

    @app.route("/api/attendance/summary", methods=["GET"], endpoint="api_attendance_summary")
    @role_required(Role.STUDENT)
    def api_attendance_summary():
        rows = container.buffer_service.summarize_for_student(int(session["user_id"]))
        return jsonify({"success": True, "subjects": [r.to_dict() for r in rows]})

    @app.route("/api/attendance/subjects/<int:subject_id>/buffer", methods=["GET"], endpoint="api_my_buffer")
    @role_required(Role.STUDENT)
    def api_my_buffer(subject_id: int):
        result = container.buffer_service.compute_buffer(int(session["user_id"]), subject_id)
        return jsonify({"success": True, "buffer": result.to_dict()})

    @app.route(
        "/api/students/<int:student_id>/subjects/<int:subject_id>/buffer",
        methods=["GET"],
        endpoint="api_student_buffer",
    )
    @role_required(Role.FACULTY, Role.ADMIN)
    def api_student_buffer(student_id: int, subject_id: int):
        result = container.buffer_service.compute_buffer(student_id, subject_id)
        return jsonify({"success": True, "buffer": result.to_dict()})

    @app.route("/api/attendance/trend", methods=["GET"], endpoint="api_attendance_trend")
    @role_required(Role.STUDENT)
    def api_attendance_trend():
        checkpoints = container.trend_service.compute_trend(int(session["user_id"]))
        return jsonify({"success": True, "trend": [c.to_dict() for c in checkpoints]})

    @app.route("/api/attendance/recent", methods=["GET"], endpoint="api_attendance_recent")
    @role_required(Role.STUDENT)
    def api_attendance_recent():
        limit_s = request.args.get("limit") or str(DEFAULT_RECENT_LIMIT)
        if not limit_s.isdigit():
            raise ValidationError("limit must be a positive integer")
        records = container.attendance_service.list_recent(int(session["user_id"]), limit=int(limit_s))
        return jsonify({"success": True, "records": records})

    @app.route("/api/faculty/sessions/<int:session_id>/attendance", methods=["POST"], endpoint="api_bulk_mark")
    @role_required(Role.FACULTY)
    def api_bulk_mark(session_id: int):
        data = request.get_json(silent=True) or {}
        records = data.get("records")
        if not isinstance(records, list):
            raise ValidationError("records must be a list of {student_id, status}")
        if not all(isinstance(r, dict) for r in records):
            raise ValidationError("records must be a list of {student_id, status}")

        written = container.attendance_service.bulk_mark(
            current_role=Role(session.get("role")),
            session_id=session_id,
            records=records,
        )
        return jsonify({"success": True, "saved": written})
