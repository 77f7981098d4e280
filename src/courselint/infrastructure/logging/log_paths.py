"""Centralized log path management for courselint."""

from pathlib import Path

import platformdirs

from courselint.infrastructure.config import APP_NAME


def get_log_dir() -> Path:
    """Get the system-appropriate log directory for courselint.

    Returns:
        Path to the log directory (created if it doesn't exist)
        - Windows: %LOCALAPPDATA%/courselint/Logs
        - macOS: ~/Library/Logs/courselint
        - Linux: ~/.local/state/courselint/log
    """
    log_dir = Path(platformdirs.user_log_dir(APP_NAME, appauthor=False))
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


def get_main_log_path() -> Path:
    """Get the path to the main courselint log file."""
    return get_log_dir() / f"{APP_NAME}.log"


def find_log_dir() -> Path | None:
    """Like `get_log_dir()`, but None if the directory can't be created."""
    try:
        return get_log_dir()
    except OSError:
        return None
