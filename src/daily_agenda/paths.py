"""Where the agenda keeps its log file."""

from __future__ import annotations

from pathlib import Path

from platformdirs import PlatformDirs

APP_NAME = "daily-agenda"
LOG_FILENAME = "agenda.log"


def get_log_dir() -> Path:
    dirs = PlatformDirs(appname=APP_NAME, appauthor=False, ensure_exists=True)
    return Path(dirs.user_log_path)


def get_log_path(filename: str = LOG_FILENAME) -> Path:
    """Log file path in the platform log directory, which is created if missing."""
    return get_log_dir() / filename
