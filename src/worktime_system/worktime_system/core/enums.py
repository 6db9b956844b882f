from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles checked by controllers before privileged calls."""

    ADMIN = "admin"
    STAFF = "staff"


class AttendanceState(str, Enum):
    NOT_STARTED = "NOT_STARTED"
    OPEN = "OPEN"
    CLOSED = "CLOSED"


class AuditField(str, Enum):
    """Closed set of attendance fields that may appear in the audit log."""

    CLOCK_IN = "clockIn"
    CLOCK_OUT = "clockOut"


class Weekday(int, Enum):
    """ISO-independent weekday numbering matching ``date.weekday()``."""

    MON = 0
    TUE = 1
    WED = 2
    THU = 3
    FRI = 4
    SAT = 5
    SUN = 6

    @classmethod
    def parse(cls, value: str) -> "Weekday":
        try:
            return cls[value.strip().upper()[:3]]
        except KeyError:
            raise ValueError(f"Unknown weekday: {value!r}")


class Classification(str, Enum):
    EXCESSIVE = "excessive"
    LOW = "low"
    BALANCED = "balanced"


class ErrorKind(str, Enum):
    """Machine-readable failure kinds; callers never need to parse messages."""

    ALREADY_OPEN = "AlreadyOpen"
    DUPLICATE_DAY = "DuplicateDay"
    NO_OPEN_RECORD = "NoOpenRecord"
    INVALID_ORDER = "InvalidOrder"
    NOT_FOUND = "NotFound"
    RECOMPUTE_FAILURE = "RecomputeFailure"
    VALIDATION = "Validation"
