from datetime import time

import pytest

from src.worktime_system.worktime_system.breaks.model import BreakRule, BreakRuleSet
from src.worktime_system.worktime_system.core.exceptions import InvalidOrder
from src.worktime_system.worktime_system.worktime.calculator.break_window_calculator import BreakWindowCalculator
from tests.fakes import jst, lunch_rule

LUNCH = BreakRuleSet.from_rules([lunch_rule()])


def test_full_day_subtracts_whole_break():
    calc = BreakWindowCalculator()
    clock_in, clock_out = jst(2025, 1, 6, 8, 0), jst(2025, 1, 6, 17, 0)

    assert calc.gross_minutes(clock_in, clock_out) == 540
    assert calc.net_minutes(clock_in, clock_out, LUNCH) == 495


def test_no_rule_for_weekday_keeps_gross():
    calc = BreakWindowCalculator()
    assert calc.net_minutes(jst(2025, 1, 4, 8, 0), jst(2025, 1, 4, 17, 0), LUNCH) == 540


def test_shift_inside_break_is_never_negative():
    calc = BreakWindowCalculator()
    assert calc.net_minutes(jst(2025, 1, 6, 12, 10), jst(2025, 1, 6, 12, 20), LUNCH) == 0


def test_clock_out_not_after_clock_in_is_rejected():
    calc = BreakWindowCalculator()
    with pytest.raises(InvalidOrder):
        calc.net_minutes(jst(2025, 1, 6, 17, 0), jst(2025, 1, 6, 8, 0), LUNCH)
    with pytest.raises(InvalidOrder):
        calc.net_minutes(jst(2025, 1, 6, 8, 0), jst(2025, 1, 6, 8, 0), LUNCH)


def test_overnight_shift_only_uses_clock_in_date_rules():
    early = BreakRule(rule_id=2, name="Early", start_time=time(2, 0), end_time=time(2, 30))
    rule_set = BreakRuleSet.from_rules([early])
    calc = BreakWindowCalculator()

    # 22:00 Mon -> 06:00 Tue: the 02:00 window on Tuesday is not applied
    assert calc.net_minutes(jst(2025, 1, 6, 22, 0), jst(2025, 1, 7, 6, 0), rule_set) == 480


def test_utc_input_is_bucketed_in_business_timezone():
    from datetime import datetime, timezone

    calc = BreakWindowCalculator()
    # 2025-01-05 23:00 UTC is Monday 08:00 in UTC+9
    clock_in = datetime(2025, 1, 5, 23, 0, tzinfo=timezone.utc)
    clock_out = datetime(2025, 1, 6, 8, 0, tzinfo=timezone.utc)
    assert calc.net_minutes(clock_in, clock_out, LUNCH) == 495
