from __future__ import annotations

import logging
from datetime import date
from functools import wraps

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import parse_iso_date, today_local
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
                if allowed and session.get("role") not in allowed:
                    return jsonify({"success": False, "message": "You do not have access to this page"}), 403
                try:
                    return view(*args, **kwargs)
                except ValidationError as e:
                    return jsonify({"success": False, "message": str(e)}), 400
                except AuthorizationError as e:
                    return jsonify({"success": False, "message": str(e)}), 403
                except DataUnavailableError:
                    logger.exception("timetable data unavailable for %s", request.path)
                    return jsonify({"success": False, "message": "Timetable data is temporarily unavailable"}), 503

            return wrapper

        return decorator

    def _parse_date(value: str) -> date:
        try:
            return parse_iso_date(value)
        except ValueError:
            raise ValidationError("Date must be YYYY-MM-DD")

    @app.route("/api/subjects", methods=["GET"], endpoint="api_subjects")
    @role_required()
    def api_subjects():
        return jsonify({"success": True, "subjects": container.subject_service.list_all()})

    @app.route("/api/timetable", methods=["GET"], endpoint="api_timetable")
    @role_required(Role.STUDENT)
    def api_timetable():
        return jsonify({"success": True, "sessions": container.subject_service.timetable(int(session["user_id"]))})

    @app.route("/api/subjects/<int:subject_id>/enrol", methods=["POST"], endpoint="api_subject_enrol")
    @role_required(Role.STUDENT)
    def api_subject_enrol(subject_id: int):
        container.subject_service.enrol(
            current_role=Role(session.get("role")),
            student_id=int(session["user_id"]),
            subject_id=subject_id,
        )
        return jsonify({"success": True, "subject_id": subject_id})

    @app.route("/api/faculty/subjects", methods=["GET"], endpoint="api_faculty_subjects")
    @role_required(Role.FACULTY)
    def api_faculty_subjects():
        subjects = container.subject_service.list_for_faculty(
            current_role=Role(session.get("role")),
            faculty_id=int(session["user_id"]),
        )
        return jsonify({"success": True, "subjects": subjects})

    @app.route("/api/faculty/subjects/<int:subject_id>/sessions", methods=["GET"], endpoint="api_faculty_sessions")
    @role_required(Role.FACULTY, Role.ADMIN)
    def api_faculty_sessions(subject_id: int):
        date_s = request.args.get("date")
        on_date = _parse_date(date_s) if date_s else today_local()
        sessions = container.subject_service.list_sessions_on(
            current_role=Role(session.get("role")),
            faculty_id=int(session["user_id"]),
            subject_id=subject_id,
            on_date=on_date,
        )
        return jsonify({"success": True, "date": on_date.strftime("%Y-%m-%d"), "sessions": sessions})

    @app.route("/api/faculty/subjects/<int:subject_id>/students", methods=["GET"], endpoint="api_faculty_students")
    @role_required(Role.FACULTY, Role.ADMIN)
    def api_faculty_students(subject_id: int):
        students = container.subject_service.list_enrolled_students(
            current_role=Role(session.get("role")),
            faculty_id=int(session["user_id"]),
            subject_id=subject_id,
        )
        return jsonify({"success": True, "students": students})

    @app.route("/api/subjects/<int:subject_id>/sessions", methods=["POST"], endpoint="api_add_session")
    @role_required(Role.FACULTY, Role.ADMIN)
    def api_add_session(subject_id: int):
        data = request.get_json(silent=True) or {}
        session_id = container.subject_service.add_session(
            current_role=Role(session.get("role")),
            user_id=int(session["user_id"]),
            subject_id=subject_id,
            scheduled_date=_parse_date(str(data.get("scheduled_date") or "")),
            start_time=str(data.get("start_time") or ""),
            end_time=str(data.get("end_time") or ""),
            venue=str(data.get("venue") or ""),
            session_type=str(data.get("session_type") or "lecture"),
        )
        return jsonify({"success": True, "session_id": session_id}), 201

    @app.route("/api/sessions/<int:session_id>/cancel", methods=["POST"], endpoint="api_cancel_session")
    @role_required(Role.FACULTY, Role.ADMIN)
    def api_cancel_session(session_id: int):
        container.subject_service.cancel_session(
            current_role=Role(session.get("role")),
            user_id=int(session["user_id"]),
            session_id=session_id,
        )
        return jsonify({"success": True, "session_id": session_id, "is_cancelled": True})
