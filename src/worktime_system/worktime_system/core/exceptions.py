from __future__ import annotations

from .enums import ErrorKind


class DomainError(Exception):
    """Base exception for business rule violations."""

    kind: ErrorKind = ErrorKind.VALIDATION


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AlreadyOpen(DomainError):
    """Clock-in attempted while the user still has an open record."""

    kind = ErrorKind.ALREADY_OPEN


class DuplicateDay(DomainError):
    """The business date already holds an attendance record for the user."""

    kind = ErrorKind.DUPLICATE_DAY


class NoOpenRecord(DomainError):
    kind = ErrorKind.NO_OPEN_RECORD


class InvalidOrder(DomainError):
    """A timestamp change would make clock-out not later than clock-in."""

    kind = ErrorKind.INVALID_ORDER


class NotFound(DomainError):
    kind = ErrorKind.NOT_FOUND
