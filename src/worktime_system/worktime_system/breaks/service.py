from __future__ import annotations

import logging

from .model import BreakRuleSet
from .repository import BreakRuleRepository

logger = logging.getLogger(__name__)


class BreakRuleStore:
    """Loads the rule set effective at the moment of the call.

    Nothing is cached: a rule change made by the admin workflow is picked up
    by the next computation, and historical values only change when a
    recalculation is triggered explicitly.
    """

    def __init__(self, rules: BreakRuleRepository):
        self._rules = rules

    def current(self) -> BreakRuleSet:
        rule_set = BreakRuleSet.from_rules(self._rules.list_all())
        logger.debug("Loaded %d active break rule(s), version=%s", len(rule_set.rules), rule_set.version)
        return rule_set
