from __future__ import annotations

from datetime import date, datetime
from typing import Protocol

from ..core.constants import BUSINESS_TZ
from .datetime_utils import business_date


class Clock(Protocol):
    """Single source of "now" for the engine."""

    def now(self) -> datetime:
        raise NotImplementedError


class SystemClock:
    def now(self) -> datetime:
        return datetime.now(BUSINESS_TZ)

    def today(self) -> date:
        return business_date(self.now())
