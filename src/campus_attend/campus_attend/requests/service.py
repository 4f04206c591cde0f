from __future__ import annotations

import logging
from typing import List, Optional

from ..core.enums import MarkedBy, RequestStatus, Role
from ..core.exceptions import AuthorizationError, ValidationError
from .model import OnDutyRequest
from .repository import OnDutyRequestRepository

logger = logging.getLogger(__name__)


class OnDutyRequestService:
    def __init__(self, requests: OnDutyRequestRepository):
        self._requests = requests

    def list_for_faculty(
        self,
        *,
        current_role: Role,
        faculty_id: int,
        status: Optional[str] = None,
    ) -> List[dict]:
        if current_role != Role.FACULTY:
            raise AuthorizationError("Only faculty can review on-duty requests")

        status_filter = None
        if status:
            try:
                status_filter = RequestStatus(status)
            except ValueError:
                raise ValidationError(f"Unknown request status {status!r}")

        rows = self._requests.list_for_faculty(faculty_id=int(faculty_id), status=status_filter)
        return [
            {
                "id": r.request_id,
                "status": r.status.value,
                "created_at": r.created_at.isoformat(),
                "resolved_at": r.resolved_at.isoformat() if r.resolved_at else None,
                "faculty_response": r.faculty_response,
                "student": {"id": r.student_id, "full_name": r.student_name},
                "subject": {"id": r.subject_id, "name": r.subject_name, "code": r.subject_code},
                "class_session": {
                    "id": r.class_session_id,
                    "scheduled_date": r.scheduled_date.strftime("%Y-%m-%d") if r.scheduled_date else None,
                },
            }
            for r in rows
        ]

    def list_pending_for_session(self, *, current_role: Role, faculty_id: int, session_id: int) -> List[dict]:
        """Pending requests for one session, so the marking sheet can flag those students."""

        if current_role != Role.FACULTY:
            raise AuthorizationError("Only faculty can review on-duty requests")

        rows = self._requests.list_pending_for_session(faculty_id=int(faculty_id), class_session_id=int(session_id))
        return [{"id": r.request_id, "student_id": r.student_id, "status": r.status.value} for r in rows]

    def _get_pending_for(self, *, faculty_id: int, request_id: int) -> OnDutyRequest:
        req = self._requests.get(request_id=int(request_id))
        if not req:
            raise ValidationError("On-duty request does not exist")
        if req.faculty_id != int(faculty_id):
            raise AuthorizationError("This request is assigned to another faculty member")
        if req.status != RequestStatus.PENDING:
            raise ValidationError("On-duty request has already been resolved")
        return req

    def approve(
        self,
        *,
        current_role: Role,
        faculty_id: int,
        request_id: int,
        response: str = "",
    ) -> None:
        if current_role != Role.FACULTY:
            raise AuthorizationError("Only faculty can review on-duty requests")

        req = self._get_pending_for(faculty_id=faculty_id, request_id=request_id)

        approved = self._requests.approve_with_attendance(
            request_id=req.request_id,
            marked_by=MarkedBy.FACULTY,
            faculty_response=(response or "").strip() or None,
        )
        if not approved:
            raise ValidationError("On-duty request has already been resolved")

        logger.info(
            "on-duty request %s approved; session %s marked on_duty for student %s",
            req.request_id, req.class_session_id, req.student_id,
        )

    def reject(
        self,
        *,
        current_role: Role,
        faculty_id: int,
        request_id: int,
        response: str = "",
    ) -> None:
        if current_role != Role.FACULTY:
            raise AuthorizationError("Only faculty can review on-duty requests")

        req = self._get_pending_for(faculty_id=faculty_id, request_id=request_id)

        decided = self._requests.decide(
            request_id=req.request_id,
            status=RequestStatus.REJECTED,
            faculty_response=(response or "").strip() or None,
        )
        if not decided:
            raise ValidationError("On-duty request has already been resolved")

        # Student notification is handled by the messaging integration.
        logger.info("on-duty request %s rejected for student %s", req.request_id, req.student_id)
