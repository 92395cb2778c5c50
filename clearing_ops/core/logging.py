"""Project-wide console logging utilities."""

from __future__ import annotations

from clearing_ops.utils.console_logger import ConsoleLogger

# Public API ---------------------------------------------------------------
log = ConsoleLogger


def configure_console_log(level: str = "INFO", debug: bool = False) -> None:
    """Configure the console logger."""
    ConsoleLogger.set_level("DEBUG" if debug else level)


__all__ = ["log", "configure_console_log"]
