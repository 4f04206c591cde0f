from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles issued by the identity provider and used for authorization."""

    STUDENT = "student"
    FACULTY = "faculty"
    CLUB_ADMIN = "club_admin"
    ADMIN = "admin"


class AttendanceStatus(str, Enum):
    """Per-session attendance status as stored in the database."""

    PRESENT = "present"
    ABSENT = "absent"
    ON_DUTY = "on_duty"
    MEDICAL = "medical"


class MarkedBy(str, Enum):
    """Who wrote (or last corrected) an attendance record."""

    STUDENT = "student"
    FACULTY = "faculty"
    SYSTEM = "system"
    AI_APPROVED = "ai_approved"


class RequestStatus(str, Enum):
    """Lifecycle of an on-duty request."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    ESCALATED = "escalated"


class SessionType(str, Enum):
    LECTURE = "lecture"
    LAB = "lab"
    TUTORIAL = "tutorial"
