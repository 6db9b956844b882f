from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .audit.mysql_audit_repository import MySQLAuditRepository
from .audit.service import AuditService
from .breaks.mysql_break_rule_repository import MySQLBreakRuleRepository
from .breaks.service import BreakRuleStore
from .common.clock import SystemClock
from .common.locks import KeyedLock
from .core.settings import EngineSettings
from .database.connection import DBConfig, DatabaseConnection
from .database.unit_of_work import MySQLUnitOfWork
from .reconciliation.factory import ReconciliationStrategyFactory
from .reconciliation.mysql_work_record_repository import MySQLWorkRecordRepository
from .reconciliation.service import ReconciliationService
from .recalculation.service import RecalculationService
from .worktime.calculator.break_window_calculator import BreakWindowCalculator


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    attendance_repo: MySQLAttendanceRepository
    audit_repo: MySQLAuditRepository
    break_rules_repo: MySQLBreakRuleRepository
    work_records_repo: MySQLWorkRecordRepository

    break_rule_store: BreakRuleStore
    audit_service: AuditService
    attendance_service: AttendanceService
    recalculation_service: RecalculationService
    reconciliation_service: ReconciliationService


def build_container(*, db_config: dict, settings: EngineSettings | None = None) -> Container:
    settings = settings or EngineSettings()
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    attendance_repo = MySQLAttendanceRepository(conn)
    audit_repo = MySQLAuditRepository(conn)
    break_rules_repo = MySQLBreakRuleRepository(conn)
    work_records_repo = MySQLWorkRecordRepository(conn)

    clock = SystemClock()
    locks = KeyedLock()
    calculator = BreakWindowCalculator()

    break_rule_store = BreakRuleStore(break_rules_repo)
    audit_service = AuditService(audit_repo, clock=clock)
    attendance_service = AttendanceService(
        attendance_repo,
        audit_service,
        break_rule_store,
        MySQLUnitOfWork(conn),
        calculator=calculator,
        clock=clock,
        locks=locks,
        system_editor_id=settings.system_editor_id,
    )
    recalculation_service = RecalculationService(
        attendance_repo,
        break_rule_store,
        calculator=calculator,
        locks=locks,
    )
    reconciliation_service = ReconciliationService(
        attendance_repo,
        work_records_repo,
        strategy_factory=ReconciliationStrategyFactory(
            excessive_threshold_minutes=settings.excessive_threshold_minutes,
            low_tolerance_minutes=settings.low_tolerance_minutes,
        ),
        clock=clock,
        recent_business_days=settings.recent_issue_business_days,
    )

    return Container(
        conn=conn,
        attendance_repo=attendance_repo,
        audit_repo=audit_repo,
        break_rules_repo=break_rules_repo,
        work_records_repo=work_records_repo,
        break_rule_store=break_rule_store,
        audit_service=audit_service,
        attendance_service=attendance_service,
        recalculation_service=recalculation_service,
        reconciliation_service=reconciliation_service,
    )
