from __future__ import annotations

import os
from dataclasses import dataclass

DEPARTMENTS: tuple[str, ...] = ("CSE", "ECE", "IT", "MECH", "CIVIL")

# Values restored by the "reset" action of the seating form.
DEFAULT_ROWS = 5
DEFAULT_COLS = 6
DEFAULT_COUNTS: dict[str, int] = {d: 6 for d in DEPARTMENTS}

DEFAULT_ATTEMPT_LIMIT = 30_000
DEFAULT_MAX_RETRIES = 5
DEFAULT_LOG_LEVEL = "WARNING"
LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _env_int(name: str, default: int, *, minimum: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}, got {value}")
    return value


def log_level() -> str:
    raw = os.environ.get("EXAM_SEATING_LOG_LEVEL")
    if raw is None or raw.strip() == "":
        return DEFAULT_LOG_LEVEL
    level = raw.strip().upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"EXAM_SEATING_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {raw!r}")
    return level


@dataclass(frozen=True)
class SolverSettings:
    attempt_limit: int = DEFAULT_ATTEMPT_LIMIT
    max_retries: int = DEFAULT_MAX_RETRIES

    @classmethod
    def from_env(cls) -> "SolverSettings":
        return cls(
            attempt_limit=_env_int("EXAM_SEATING_ATTEMPT_LIMIT", DEFAULT_ATTEMPT_LIMIT, minimum=1),
            max_retries=_env_int("EXAM_SEATING_MAX_RETRIES", DEFAULT_MAX_RETRIES, minimum=0),
        )
