"""Force-close attendance records still open past 23:59 (business time).

Run from cron shortly after 23:59 UTC+9. Safe to run repeatedly: records that
are already closed are left alone.
"""

from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.worktime_system.worktime_system.common.datetime_utils import parse_iso_datetime
from src.worktime_system.worktime_system.container import build_container
from src.worktime_system.worktime_system.core.settings import EngineSettings
from src.worktime_system.worktime_system.main import configure_logging


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--cutoff", help="ISO-8601 instant to treat as now (default: current time)")
    args = parser.parse_args(argv)

    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    container = build_container(db_config=settings.DB_CONFIG, settings=EngineSettings.from_module(settings))

    cutoff = parse_iso_datetime(args.cutoff) if args.cutoff else None
    result = container.attendance_service.auto_close(cutoff)
    print(
        f"OK: scanned={result.scanned} closed={result.closed} "
        f"skipped={list(result.skipped_ids)} failed={list(result.failed_ids)}"
    )
    return 1 if result.failed_ids else 0


if __name__ == "__main__":
    sys.exit(main())
