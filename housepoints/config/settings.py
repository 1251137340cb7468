# housepoints/config/settings.py
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./housepoints.db"
DEFAULT_TIMEZONE = "Europe/London"


def _to_bool(value: str, key_name: str) -> bool:
    v = value.strip().lower()
    if v in {"1", "true", "yes", "on"}:
        return True
    if v in {"0", "false", "no", "off"}:
        return False
    raise RuntimeError(f"Invalid boolean for {key_name}: {value!r}")


def ensure_timezone(name: str) -> ZoneInfo:
    """
    Loads the named zone or fails hard.
    Week and deadline maths is meaningless without the zone rules, so this
    runs once at startup instead of failing on the first request.
    """
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise RuntimeError(
            f"Timezone {name!r} is not available. Install tzdata or fix TIMEZONE."
        ) from e


@dataclass(frozen=True, slots=True)
class Settings:
    database_url: str = DEFAULT_DATABASE_URL

    # --- time ---
    timezone: str = DEFAULT_TIMEZONE

    # --- reports / scheduler ---
    reports_dir: Path = Path("reports")
    scheduler_enabled: bool = True

    # --- environment ---
    environment: str = "production"  # production | development

    @property
    def is_dev(self) -> bool:
        return self.environment.lower() in {"dev", "development", "local"}

    @classmethod
    def load(cls) -> "Settings":
        """
        Loads from process env (and .env if present).
        Fails fast on malformed values and unknown timezones.
        """
        load_dotenv()
        env = os.environ

        database_url = (env.get("DATABASE_URL") or DEFAULT_DATABASE_URL).strip()

        timezone = (env.get("TIMEZONE") or DEFAULT_TIMEZONE).strip() or DEFAULT_TIMEZONE
        ensure_timezone(timezone)

        reports_dir = Path((env.get("REPORTS_DIR") or "reports").strip() or "reports")

        scheduler_raw = (env.get("SCHEDULER_ENABLED") or "").strip()
        scheduler_enabled = _to_bool(scheduler_raw, "SCHEDULER_ENABLED") if scheduler_raw else True

        environment = (env.get("ENVIRONMENT") or "production").strip() or "production"

        return cls(
            database_url=database_url,
            timezone=timezone,
            reports_dir=reports_dir,
            scheduler_enabled=scheduler_enabled,
            environment=environment,
        )
