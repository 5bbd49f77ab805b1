from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Employee role used for authorization checks."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class AttendanceStatus(str, Enum):
    """Attendance status as stored in the database."""

    PRESENT = "Present"
    LATE = "Late"
    ABSENT = "Absent"
    INCOMPLETE = "Incomplete"


class AttendanceRemarks(str, Enum):
    COMPLETE = "Complete"
    INCOMPLETE = "Incomplete"
    MISSING_TIME_OUT = "Missing Time Out"
    MISSING_TIME_IN_AND_OUT = "Missing Time In & Time Out"


class ScanSource(str, Enum):
    BIOMETRIC = "biometric"
    MANUAL = "manual"


class DocumentStatus(str, Enum):
    """Approval workflow status (owned by the document review flow)."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ExtractionStatus(str, Enum):
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class ThresholdLevel(str, Enum):
    """Disciplinary level reached by a late or absent count."""

    WARNING = "warning"
    MEMO = "memo"
