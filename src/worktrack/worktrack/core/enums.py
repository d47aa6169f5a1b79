from __future__ import annotations

from enum import Enum
from typing import Optional


class Role(str, Enum):
    """User role used for route access checks."""

    ADMIN = "ADMIN"
    MANAGER = "MANAGER"
    STAFF = "STAFF"


class SubmissionStatus(str, Enum):
    """Review state of a single work submission (or of its assignment)."""

    PENDING = "PENDING"
    SUBMITTED = "SUBMITTED"
    VERIFIED = "VERIFIED"
    REJECTED = "REJECTED"

    @classmethod
    def parse(cls, value) -> Optional["SubmissionStatus"]:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            return None


class DayStatus(str, Enum):
    """Headline status of one calendar day."""

    NOT_SUBMITTED = "NOT_SUBMITTED"
    SUBMITTED = "SUBMITTED"
    VERIFIED = "VERIFIED"
    REJECTED = "REJECTED"


class WorkProofType(str, Enum):
    TEXT = "TEXT"
    PDF = "PDF"
    IMAGE = "IMAGE"

    @classmethod
    def parse(cls, value) -> Optional["WorkProofType"]:
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            return None


class DayLock(str, Enum):
    """Whether work can be submitted for a given day."""

    LOCKED = "LOCKED"
    OPEN = "OPEN"
    FUTURE = "FUTURE"
