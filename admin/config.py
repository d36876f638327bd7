"""Environment-variable-based configuration for the admin CLI."""

from __future__ import annotations

import os
from datetime import date
from pathlib import Path

from consistency_engine.models.enums import StepPolicy

CHALLENGE_START_DATE: date = date.fromisoformat(
    os.environ.get("CHALLENGE_START_DATE", "2026-01-19")
)
CHALLENGE_END_DATE: date = date.fromisoformat(
    os.environ.get("CHALLENGE_END_DATE", "2026-07-31")
)
# Reference timezone offset from UTC in minutes (IST = 330)
CHALLENGE_TZ_OFFSET_MINUTES: int = int(os.environ.get("CHALLENGE_TZ_OFFSET_MINUTES", "330"))
CHALLENGE_DATA_PATH: Path = Path(
    os.environ.get("CHALLENGE_DATA_PATH", "~/.fitness_challenge/challenge.json")
).expanduser()
STEP_POLICY: StepPolicy = StepPolicy[os.environ.get("STEP_POLICY", "UNRESTRICTED").upper()]
