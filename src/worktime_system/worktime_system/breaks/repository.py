from __future__ import annotations

from typing import Protocol, Sequence

from .model import BreakRule


class BreakRuleRepository(Protocol):
    """Read-only view of the break rules maintained by the admin workflow."""

    def list_all(self) -> Sequence[BreakRule]:
        raise NotImplementedError
