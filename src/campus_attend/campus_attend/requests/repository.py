from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.constants import DEFAULT_REQUEST_LIST_LIMIT
from ..core.enums import MarkedBy, RequestStatus
from .model import OnDutyRequest, OnDutyRequestRow


class OnDutyRequestRepository(Protocol):
    def get(self, *, request_id: int) -> Optional[OnDutyRequest]:
        raise NotImplementedError

    def list_for_faculty(
        self,
        *,
        faculty_id: int,
        status: Optional[RequestStatus] = None,
        limit: int = DEFAULT_REQUEST_LIST_LIMIT,
    ) -> Sequence[OnDutyRequestRow]:
        """Newest first."""

        raise NotImplementedError

    def decide(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        faculty_response: Optional[str] = None,
    ) -> bool:
        """Resolve a pending request; returns False when it was no longer pending."""

        raise NotImplementedError

    def approve_with_attendance(
        self,
        *,
        request_id: int,
        marked_by: MarkedBy,
        faculty_response: Optional[str] = None,
    ) -> bool:
        """Approve a pending request and mark its session ``on_duty`` in one transaction.

        Returns False when the request was no longer pending; nothing is written then.
        """

        raise NotImplementedError

    def list_pending_for_session(self, *, faculty_id: int, class_session_id: int) -> Sequence[OnDutyRequest]:
        raise NotImplementedError
