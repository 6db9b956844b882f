"""Example: drive the services directly, without Flask.

Controllers stay thin; everything below is what the HTTP routes call.
"""

import importlib
import json
from datetime import timedelta

from config import get_settings_module

from src.worktime_system.worktime_system.common.clock import SystemClock
from src.worktime_system.worktime_system.container import build_container
from src.worktime_system.worktime_system.core.settings import EngineSettings


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, settings=EngineSettings.from_module(settings))

    yesterday = SystemClock().today() - timedelta(days=1)
    status = container.attendance_service.get_status(user_id=1, work_date=yesterday)
    print(json.dumps(status.to_dict() if status else None, indent=2, ensure_ascii=False))

    result = container.reconciliation_service.reconcile(1, yesterday)
    print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
