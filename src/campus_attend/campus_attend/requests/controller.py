from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import AuthorizationError, DataUnavailableError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def faculty_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return jsonify({"success": False, "message": "Please sign in to continue"}), 401
            if session.get("role") != Role.FACULTY.value:
                return jsonify({"success": False, "message": "You do not have access to this page"}), 403
            try:
                return view(*args, **kwargs)
            except ValidationError as e:
                return jsonify({"success": False, "message": str(e)}), 400
            except AuthorizationError as e:
                return jsonify({"success": False, "message": str(e)}), 403
            except DataUnavailableError:
                logger.exception("on-duty request data unavailable for %s", request.path)
                return jsonify({"success": False, "message": "Request data is temporarily unavailable"}), 503

        return wrapper

    @app.route("/api/faculty/od-requests", methods=["GET"], endpoint="api_od_requests")
    @faculty_required
    def api_od_requests():
        data = container.od_request_service.list_for_faculty(
            current_role=Role(session.get("role")),
            faculty_id=int(session["user_id"]),
            status=request.args.get("status") or None,
        )
        return jsonify({"success": True, "requests": data})

    @app.route("/api/faculty/sessions/<int:session_id>/od-requests", methods=["GET"], endpoint="api_session_od_requests")
    @faculty_required
    def api_session_od_requests(session_id: int):
        data = container.od_request_service.list_pending_for_session(
            current_role=Role(session.get("role")),
            faculty_id=int(session["user_id"]),
            session_id=session_id,
        )
        return jsonify({"success": True, "requests": data})

    @app.route("/api/faculty/od-requests/<int:request_id>/approve", methods=["POST"], endpoint="api_od_approve")
    @faculty_required
    def api_od_approve(request_id: int):
        data = request.get_json(silent=True) or {}
        container.od_request_service.approve(
            current_role=Role(session.get("role")),
            faculty_id=int(session["user_id"]),
            request_id=request_id,
            response=str(data.get("response") or ""),
        )
        return jsonify({"success": True, "status": "approved"})

    @app.route("/api/faculty/od-requests/<int:request_id>/reject", methods=["POST"], endpoint="api_od_reject")
    @faculty_required
    def api_od_reject(request_id: int):
        data = request.get_json(silent=True) or {}
        container.od_request_service.reject(
            current_role=Role(session.get("role")),
            faculty_id=int(session["user_id"]),
            request_id=request_id,
            response=str(data.get("response") or ""),
        )
        return jsonify({"success": True, "status": "rejected"})
