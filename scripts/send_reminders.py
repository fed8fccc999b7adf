#!/usr/bin/env python3
"""Pensado para cron, una vez por día: `python scripts/send_reminders.py`."""
from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))

from turnero.core.database import SessionLocal  # noqa: E402
from turnero.core.logging_setup import configure_logging  # noqa: E402
import turnero.models  # noqa: E402,F401
from turnero.services.reminders import send_daily_reminders  # noqa: E402


def main() -> int:
    configure_logging()
    db = SessionLocal()
    try:
        sent = send_daily_reminders(db)
    finally:
        db.close()
    print(f"Recordatorios enviados: {sent}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
