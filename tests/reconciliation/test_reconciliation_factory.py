import pytest

from src.worktime_system.worktime_system.core.enums import Classification
from src.worktime_system.worktime_system.reconciliation.factory import ReconciliationStrategyFactory
from src.worktime_system.worktime_system.reconciliation.strategies.balanced_strategy import BalancedStrategy
from src.worktime_system.worktime_system.reconciliation.strategies.excessive_strategy import ExcessiveStrategy
from src.worktime_system.worktime_system.reconciliation.strategies.low_strategy import LowStrategy


@pytest.mark.parametrize(
    "attendance, work, expected",
    [
        (495, 526, ExcessiveStrategy),  # +31
        (495, 525, BalancedStrategy),  # +30
        (495, 495, BalancedStrategy),
        (495, 494, LowStrategy),
        (0, 0, BalancedStrategy),
    ],
)
def test_default_thresholds(attendance, work, expected):
    factory = ReconciliationStrategyFactory()
    assert isinstance(factory.for_totals(attendance_minutes=attendance, work_minutes=work), expected)


def test_thresholds_are_configurable():
    factory = ReconciliationStrategyFactory(excessive_threshold_minutes=60, low_tolerance_minutes=15)

    assert isinstance(factory.for_totals(attendance_minutes=495, work_minutes=540), BalancedStrategy)
    assert isinstance(factory.for_totals(attendance_minutes=495, work_minutes=485), BalancedStrategy)
    assert isinstance(factory.for_totals(attendance_minutes=495, work_minutes=479), LowStrategy)


def test_decision_carries_classification_and_note():
    decision = ExcessiveStrategy().decide(attendance_minutes=495, work_minutes=560)
    assert decision.classification == Classification.EXCESSIVE
    assert "65" in decision.note
