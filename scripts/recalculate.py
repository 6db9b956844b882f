"""Recompute work minutes of all closed attendance records with the current break rules.

Ctrl+C stops between records; re-running only updates values that changed.
"""

from __future__ import annotations

import importlib
import json
import signal
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.worktime_system.worktime_system.container import build_container
from src.worktime_system.worktime_system.core.settings import EngineSettings
from src.worktime_system.worktime_system.main import configure_logging


def main() -> int:
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    container = build_container(db_config=settings.DB_CONFIG, settings=EngineSettings.from_module(settings))

    stop_requested = False

    def _request_stop(signum, frame):
        nonlocal stop_requested
        stop_requested = True

    signal.signal(signal.SIGINT, _request_stop)
    signal.signal(signal.SIGTERM, _request_stop)

    summary = container.recalculation_service.recalculate_all(should_stop=lambda: stop_requested)
    print(json.dumps(summary.to_dict(), ensure_ascii=False, indent=2))
    return 1 if summary.errors else 0


if __name__ == "__main__":
    sys.exit(main())
