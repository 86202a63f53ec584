"""
Runtime settings, driven by environment variables.

Values are read from the process environment, optionally seeded from a .env
file. Variables already set in the environment win over the file.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("console", "json")


@dataclass(frozen=True)
class Settings:
    """Logging settings for applications embedding rulenet."""

    log_level: str = "INFO"
    log_format: str = "console"

    def __post_init__(self) -> None:
        if self.log_level not in LOG_LEVELS:
            raise ValueError(
                f"RULENET_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, "
                f"got {self.log_level!r}"
            )
        if self.log_format not in LOG_FORMATS:
            raise ValueError(
                f"RULENET_LOG_FORMAT must be one of {', '.join(LOG_FORMATS)}, "
                f"got {self.log_format!r}"
            )


def load_settings(env_file: str | Path | None = None) -> Settings:
    """
    Build Settings from the environment.

    Reads ``RULENET_LOG_LEVEL`` (case-insensitive) and ``RULENET_LOG_FORMAT``.
    When ``env_file`` is given it is loaded first; otherwise a .env in the
    working directory or one of its parents is used if present.
    """
    if env_file is not None:
        load_dotenv(env_file, override=False)
    else:
        load_dotenv(find_dotenv(usecwd=True), override=False)

    return Settings(
        log_level=os.environ.get("RULENET_LOG_LEVEL", "INFO").strip().upper(),
        log_format=os.environ.get("RULENET_LOG_FORMAT", "console").strip().lower(),
    )
