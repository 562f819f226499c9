"""Application configuration with environment-specific profiles.

Supports dev, staging, production and test environments via APP_ENV.
All values can be overridden by environment variables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache


@dataclass(frozen=True)
class Settings:
    """Immutable application settings resolved from environment."""

    app_env: str = "dev"
    log_level: str = "INFO"

    # HTTP surface
    cors_origins: list[str] = field(default_factory=lambda: ["http://localhost:3000"])
    request_id_header_name: str = "X-Request-ID"
    rate_limit_enabled: bool = True
    rate_limit_storage_uri: str = "memory://"
    compile_rate_limit: str = "30/minute"

    # Progressive pace blending curve (breakpoints and per-segment slopes)
    blend_early_breakpoint: float = 0.3
    blend_late_breakpoint: float = 0.7
    blend_early_slope: float = 0.5
    blend_middle_slope: float = 1.5
    blend_late_slope: float = 0.833

    # Fallback distances used when a workout's distance cannot be read
    default_hard_workout_distance: float = 5.0
    default_quality_distance: float = 4.0
    default_easy_distance: float = 3.0

    # Missing long-run repair (miles; scaled for metric plans)
    default_long_run_distance: float = 6.0
    max_long_run_distance: float = 20.0

    # Allowed gap between a week header's total and its workouts' sum
    mileage_tolerance: float = 2.0

    # Ride distance to run-equivalent distance
    runeq_factor: float = 2.0

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @property
    def is_dev(self) -> bool:
        return self.app_env == "dev"


# -- Environment profiles --

_ENV_PROFILES: dict[str, dict] = {
    "dev": {
        "log_level": "DEBUG",
        "compile_rate_limit": "120/minute",
    },
    "staging": {
        "log_level": "INFO",
        "compile_rate_limit": "60/minute",
    },
    "production": {
        "log_level": "WARNING",
        "compile_rate_limit": "30/minute",
    },
    "test": {
        "log_level": "WARNING",
        "rate_limit_enabled": False,
    },
}


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_list(name: str, default: list[str]) -> list[str]:
    raw = os.getenv(name)
    if not raw:
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Build Settings by merging environment profile with env-var overrides."""
    app_env = os.getenv("APP_ENV", "dev")
    profile = _ENV_PROFILES.get(app_env, _ENV_PROFILES["dev"])

    return Settings(
        app_env=app_env,
        log_level=os.getenv("LOG_LEVEL", profile.get("log_level", "INFO")),
        cors_origins=_env_list("CORS_ORIGINS", ["http://localhost:3000"]),
        request_id_header_name=os.getenv("REQUEST_ID_HEADER_NAME", "X-Request-ID"),
        rate_limit_enabled=_env_bool("RATE_LIMIT_ENABLED", profile.get("rate_limit_enabled", True)),
        rate_limit_storage_uri=os.getenv("RATE_LIMIT_STORAGE_URI", "memory://"),
        compile_rate_limit=os.getenv("COMPILE_RATE_LIMIT", profile.get("compile_rate_limit", "30/minute")),
        blend_early_breakpoint=float(os.getenv("BLEND_EARLY_BREAKPOINT", "0.3")),
        blend_late_breakpoint=float(os.getenv("BLEND_LATE_BREAKPOINT", "0.7")),
        blend_early_slope=float(os.getenv("BLEND_EARLY_SLOPE", "0.5")),
        blend_middle_slope=float(os.getenv("BLEND_MIDDLE_SLOPE", "1.5")),
        blend_late_slope=float(os.getenv("BLEND_LATE_SLOPE", "0.833")),
        default_hard_workout_distance=float(os.getenv("DEFAULT_HARD_WORKOUT_DISTANCE", "5")),
        default_quality_distance=float(os.getenv("DEFAULT_QUALITY_DISTANCE", "4")),
        default_easy_distance=float(os.getenv("DEFAULT_EASY_DISTANCE", "3")),
        default_long_run_distance=float(os.getenv("DEFAULT_LONG_RUN_DISTANCE", "6")),
        max_long_run_distance=float(os.getenv("MAX_LONG_RUN_DISTANCE", "20")),
        mileage_tolerance=float(os.getenv("MILEAGE_TOLERANCE", "2")),
        runeq_factor=float(os.getenv("RUNEQ_FACTOR", "2.0")),
    )
