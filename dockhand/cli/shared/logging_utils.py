"""Loguru helpers for consistent file logging in CLI commands."""

from __future__ import annotations

from pathlib import Path

from loguru import logger

from dockhand.utils.helpers import ensure_dir, get_data_path

_SINK_IDS: dict[str, int] = {}


def get_log_dir() -> Path:
    return ensure_dir(get_data_path() / "logs")


def ensure_rotating_log_file(name: str, level: str = "INFO") -> Path:
    """Ensure a rotating log sink for the given command name."""
    log_path = get_log_dir() / f"{name}.log"
    if name in _SINK_IDS:
        return log_path
    sink_id = logger.add(
        str(log_path),
        level=level,
        rotation="10 MB",
        retention="14 days",
        enqueue=True,
        encoding="utf-8",
        backtrace=False,
        diagnose=False,
    )
    _SINK_IDS[name] = sink_id
    return log_path


def remove_log_sinks() -> None:
    """Detach every sink added by ensure_rotating_log_file."""
    for sink_id in _SINK_IDS.values():
        try:
            logger.remove(sink_id)
        except ValueError:
            pass
    _SINK_IDS.clear()
