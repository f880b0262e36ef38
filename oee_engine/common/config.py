from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


def _default_env_file() -> str:
    # Plant deployments keep one .env next to the working directory.
    return str(Path.cwd() / ".env")


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    update_rate_ms: int
    config_refresh_ticks: int
    validate_ticks: int
    history_size: int

    write_retry_cooldown_seconds: float
    shift_warning_seconds: float

    expected_part_fallback: float
    availability_fallback: float
    ideal_cycle_fallback_seconds: float

    stop_timeout_seconds: float
    seed_defaults: bool

    counter_poll_ms: int
    log_level: str

    # Used by the ASGI entry point (oee_engine.api.main).
    points_file: Optional[str] = None
    with_counter: bool = False


def get_settings() -> Settings:
    # Load env file (if present) but still allow overriding via real environment variables.
    env_file = os.getenv("OEE_ENV_FILE", _default_env_file())
    if env_file and Path(env_file).exists():
        load_dotenv(env_file, override=False)

    return Settings(
        update_rate_ms=int(os.getenv("OEE_UPDATE_RATE_MS", "1000")),
        config_refresh_ticks=int(os.getenv("OEE_CONFIG_REFRESH_TICKS", "30")),
        validate_ticks=int(os.getenv("OEE_VALIDATE_TICKS", "10")),
        history_size=int(os.getenv("OEE_HISTORY_SIZE", "60")),
        write_retry_cooldown_seconds=float(os.getenv("OEE_WRITE_RETRY_COOLDOWN_SECONDS", "30")),
        # 5 minute heads-up before the shift boundary.
        shift_warning_seconds=float(os.getenv("OEE_SHIFT_WARNING_SECONDS", "300")),
        # One part per minute over an 8 hour shift.
        expected_part_fallback=float(os.getenv("OEE_EXPECTED_PART_FALLBACK", "480")),
        availability_fallback=float(os.getenv("OEE_AVAILABILITY_FALLBACK", "100")),
        ideal_cycle_fallback_seconds=float(os.getenv("OEE_IDEAL_CYCLE_FALLBACK_SECONDS", "1.0")),
        stop_timeout_seconds=float(os.getenv("OEE_STOP_TIMEOUT_SECONDS", "0.5")),
        seed_defaults=_env_bool("OEE_SEED_DEFAULTS", "false"),
        counter_poll_ms=int(os.getenv("OEE_COUNTER_POLL_MS", "50")),
        log_level=os.getenv("OEE_LOG_LEVEL", "INFO").upper(),
        points_file=os.getenv("OEE_POINTS_FILE") or None,
        with_counter=_env_bool("OEE_WITH_COUNTER", "false"),
    )
