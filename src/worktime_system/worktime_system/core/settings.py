from __future__ import annotations

from dataclasses import dataclass
from types import ModuleType

from .constants import (
    DEFAULT_EXCESSIVE_THRESHOLD_MINUTES,
    DEFAULT_LOW_TOLERANCE_MINUTES,
    DEFAULT_RECENT_ISSUE_BUSINESS_DAYS,
    DEFAULT_SYSTEM_EDITOR_ID,
)


@dataclass(frozen=True)
class EngineSettings:
    """Typed view over a ``config.<env>`` settings module."""

    excessive_threshold_minutes: int = DEFAULT_EXCESSIVE_THRESHOLD_MINUTES
    low_tolerance_minutes: int = DEFAULT_LOW_TOLERANCE_MINUTES
    system_editor_id: int = DEFAULT_SYSTEM_EDITOR_ID
    recent_issue_business_days: int = DEFAULT_RECENT_ISSUE_BUSINESS_DAYS

    @classmethod
    def from_module(cls, settings: ModuleType) -> "EngineSettings":
        return cls(
            excessive_threshold_minutes=int(
                getattr(settings, "EXCESSIVE_THRESHOLD_MINUTES", DEFAULT_EXCESSIVE_THRESHOLD_MINUTES)
            ),
            low_tolerance_minutes=int(getattr(settings, "LOW_TOLERANCE_MINUTES", DEFAULT_LOW_TOLERANCE_MINUTES)),
            system_editor_id=int(getattr(settings, "SYSTEM_EDITOR_ID", DEFAULT_SYSTEM_EDITOR_ID)),
            recent_issue_business_days=int(
                getattr(settings, "RECENT_ISSUE_BUSINESS_DAYS", DEFAULT_RECENT_ISSUE_BUSINESS_DAYS)
            ),
        )
