"""Console logging for the clearing-house operator scripts.

Severity levels follow the ``logging`` numbers plus a custom SUCCESS level.
Output goes through ``rich`` when stdout is a terminal and falls back to plain
ANSI otherwise.

Environment knobs
-----------------
* ``LOG_LEVEL``    – e.g. ``WARNING``.
* ``LOG_FORMAT``   – ``json`` to force JSON lines.
* ``LOG_NO_EMOJI`` – ``1`` to strip emoji.

Example
-------
>>> from clearing_ops.utils.console_logger import ConsoleLogger as Log
>>> Log.set_level("DEBUG")
>>> Log.info("Market created", payload={"market_index": 0})
"""

from __future__ import annotations

import inspect
import io
import json
import os
import threading
import time
import traceback
from enum import IntEnum
from typing import Any, Callable, Dict, Optional

from rich.console import Console

_RICH_CONSOLE = Console()


class Level(IntEnum):
    DEBUG = 10
    INFO = 20
    SUCCESS = 25
    WARNING = 30
    ERROR = 40
    CRITICAL = 50

    @classmethod
    def coerce(cls, value: str | int) -> "Level":
        if isinstance(value, int):
            return Level(value)
        try:
            return Level[value.upper()]
        except KeyError as e:
            raise ValueError(f"Unknown log level: {value}") from e


class ConsoleLogger:
    """Class-level console logger shared by every module."""

    logging_enabled: bool = True

    _default_level: Level = Level.coerce(os.getenv("LOG_LEVEL", "INFO"))
    _module_levels: dict[str, Level] = {}

    _sinks: list[Callable[[dict[str, Any]], None]] = []
    _lock = threading.RLock()

    _force_json: bool = os.getenv("LOG_FORMAT", "").lower() == "json"
    _strip_emoji: bool = os.getenv("LOG_NO_EMOJI", "") == "1"

    _COLORS = {
        Level.DEBUG: "\033[38;5;208m",
        Level.INFO: "\033[94m",
        Level.SUCCESS: "\033[92m",
        Level.WARNING: "\033[93m",
        Level.ERROR: "\033[91m",
        Level.CRITICAL: "\033[95m",
        "endc": "\033[0m",
    }

    _ICONS = {
        Level.DEBUG: "🐞",
        Level.INFO: "ℹ️",
        Level.SUCCESS: "✅",
        Level.WARNING: "⚠️",
        Level.ERROR: "❌",
        Level.CRITICAL: "☠️",
    }

    # ----------------------------------------------------------------------
    #                Public configuration helpers
    # ----------------------------------------------------------------------

    @classmethod
    def set_level(cls, level: str | int, module: str | None = None) -> None:
        """Change global or per-module minimum level.

        When *module* is None, the default level is updated.
        """
        lvl = Level.coerce(level)
        if module:
            cls._module_levels[module] = lvl
        else:
            cls._default_level = lvl

    @classmethod
    def add_sink(cls, func: Callable[[dict[str, Any]], None]) -> None:
        """Register a callable that receives every emitted event dict."""
        cls._sinks.append(func)

    @classmethod
    def remove_sink(cls, func: Callable[[dict[str, Any]], None]) -> None:
        if func in cls._sinks:
            cls._sinks.remove(func)

    # --------------------------- Internals --------------------------------

    @staticmethod
    def _timestamp() -> str:
        return time.strftime("%Y-%m-%d %H:%M:%S", time.localtime())

    @classmethod
    def _get_caller_module(cls) -> str:
        for frame in inspect.stack()[3:]:
            module = inspect.getmodule(frame[0])
            if module and hasattr(module, "__name__"):
                name = module.__name__
                if name == "__main__":
                    return frame.filename.split("/")[-1].split(".")[0]
                return name.split(".")[-1]
        return "unknown"

    @classmethod
    def _meets_threshold(cls, level: Level, module: str) -> bool:
        min_allowed = cls._module_levels.get(module, cls._default_level)
        return level >= min_allowed

    @classmethod
    def _emit_pretty(cls, event: dict[str, Any]) -> None:
        level = Level[event["level"]]
        color = cls._COLORS.get(level, "")
        endc = cls._COLORS["endc"]
        icon = "" if cls._strip_emoji else cls._ICONS.get(level, "")
        payload_str = ""
        payload = event.get("payload")
        if payload:
            if all(isinstance(v, (str, int, float, bool, type(None))) for v in payload.values()):
                payload_str = " → " + ", ".join(f"{k}: {v}" for k, v in payload.items())
            else:
                payload_str = "\n" + json.dumps(payload, indent=2, default=str)
                payload_str = "\n".join("    " + l for l in payload_str.splitlines())
        label = f"{icon} {event['message']} :: [{event['source']}] @ {event['ts']}"

        if _RICH_CONSOLE.is_terminal:
            _RICH_CONSOLE.print(f"{label}{payload_str}", style="bold", markup=False, soft_wrap=True)
        else:
            print(f"{color}{label}{payload_str}{endc}")

    @classmethod
    def _print(
        cls,
        level: Level,
        message: str,
        source: Optional[str] = None,
        payload: Optional[Dict[str, Any]] = None,
    ) -> None:
        if not cls.logging_enabled:
            return
        eff_source = source or cls._get_caller_module()
        if not cls._meets_threshold(level, eff_source):
            return

        event = {
            "ts": cls._timestamp(),
            "level": level.name,
            "level_no": int(level),
            "message": message,
            "source": eff_source,
            "payload": payload or {},
        }

        with cls._lock:
            if cls._force_json:
                print(json.dumps(event, default=str))
            else:
                cls._emit_pretty(event)
            for sink in cls._sinks:
                try:
                    sink(event)
                except Exception:  # pragma: no cover
                    pass

    # ----------------------------- API ------------------------------------

    @classmethod
    def debug(cls, msg: str, source: str | None = None, payload: dict | None = None) -> None:
        cls._print(Level.DEBUG, msg, source, payload)

    @classmethod
    def info(cls, msg: str, source: str | None = None, payload: dict | None = None) -> None:
        cls._print(Level.INFO, msg, source, payload)

    @classmethod
    def success(cls, msg: str, source: str | None = None, payload: dict | None = None) -> None:
        cls._print(Level.SUCCESS, msg, source, payload)

    @classmethod
    def warning(cls, msg: str, source: str | None = None, payload: dict | None = None) -> None:
        cls._print(Level.WARNING, msg, source, payload)

    @classmethod
    def error(cls, msg: str, source: str | None = None, payload: dict | None = None) -> None:
        cls._print(Level.ERROR, msg, source, payload)

    @classmethod
    def critical(cls, msg: str, source: str | None = None, payload: dict | None = None) -> None:
        cls._print(Level.CRITICAL, msg, source, payload)

    @classmethod
    def exception(cls, exc: BaseException, msg: str = "", **kw) -> None:
        """Log *exc* at ERROR with its traceback in the payload."""
        buf = io.StringIO()
        traceback.print_exception(type(exc), exc, exc.__traceback__, file=buf)
        payload = dict(kw.get("payload") or {})
        payload["traceback"] = buf.getvalue()
        full_msg = f"{msg} - {exc}" if msg else str(exc)
        cls._print(Level.ERROR, full_msg, kw.get("source"), payload)


__all__ = ["ConsoleLogger", "Level"]
