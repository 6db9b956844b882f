from __future__ import annotations

from dataclasses import dataclass, field

from ..core.enums import ErrorKind


@dataclass(frozen=True)
class RecomputeFailure:
    """One record that could not be recomputed. Reported, never raised."""

    attendance_id: int
    error: str
    kind: ErrorKind = ErrorKind.RECOMPUTE_FAILURE

    def to_dict(self) -> dict:
        return {"id": self.attendance_id, "error": self.error, "kind": self.kind.value}


@dataclass
class RecalculationSummary:
    total: int = 0
    updated: int = 0
    errors: int = 0
    error_details: list[RecomputeFailure] = field(default_factory=list)
    skipped: int = 0
    interrupted: bool = False
    rule_set_version: str = ""

    def add_failure(self, attendance_id: int, error: str) -> None:
        self.errors += 1
        self.error_details.append(RecomputeFailure(attendance_id=attendance_id, error=error))

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "updated": self.updated,
            "errors": self.errors,
            "errorDetails": [d.to_dict() for d in self.error_details],
            "skipped": self.skipped,
            "interrupted": self.interrupted,
            "ruleSetVersion": self.rule_set_version,
        }
