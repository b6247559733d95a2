"""Logging setup shared by the CLI and library callers.

Provides:
    - Console handler (stderr) with optional ANSI level colors
    - Optional file handler with size or time based rotation
    - JSON line output for log ingestion
    - Contextual fields (command, input file) attached to every record

Public API:
    setup_logging(level="INFO", log_file=None, json=False, context={"cmd": "render"})
    get_logger(name)
    push_context(input="sprite.px")
    pop_context(keys=["input"])

Format examples:
    Human: 2026-03-02T10:15:04.120Z | INFO     | cmd=render | Wrote out.svg (412 bytes)
    JSON:  {"t": "2026-03-02T10:15:04.120000+00:00", "lvl": "INFO", "cmd": "render", "msg": "..."}

The library itself never calls setup_logging(); it only emits records on
module loggers and leaves handler configuration to the application.
Repeated setup_logging() calls replace the handlers installed earlier.
"""

from __future__ import annotations

import contextvars
import json as _json
import logging
import logging.handlers
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

_context_var: contextvars.ContextVar[Dict[str, Any]] = contextvars.ContextVar(
    "pixelrect_logging_context", default={}
)

# Handlers installed by setup_logging(), removed again on reconfiguration
_installed: List[logging.Handler] = []

_LEVEL_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}
_RESET = "\033[0m"


class ContextFormatter(logging.Formatter):
    """Formatter that appends fields from push_context() to each record.

    Parameters
    ----------
    fmt_mode : str
        ``"human"`` or ``"json"``
    use_color : bool
        Color the level name (only honoured when stderr is a TTY)
    """

    def __init__(self, fmt_mode: str = "human", use_color: bool = True):
        super().__init__()
        if fmt_mode not in ("human", "json"):
            raise ValueError(f"Unknown log format: {fmt_mode!r}. Use 'human' or 'json'.")
        self.fmt_mode = fmt_mode
        self.use_color = use_color and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        context = _context_var.get()
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc)
        if self.fmt_mode == "json":
            return self._format_json(record, ts, context)
        return self._format_human(record, ts, context)

    def _format_json(
        self, record: logging.LogRecord, ts: datetime, context: Dict[str, Any]
    ) -> str:
        payload: Dict[str, Any] = {
            "t": ts.isoformat(),
            "lvl": record.levelname,
            "name": record.name,
            "msg": record.getMessage(),
        }
        payload.update(context)
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return _json.dumps(payload, default=str)

    def _format_human(
        self, record: logging.LogRecord, ts: datetime, context: Dict[str, Any]
    ) -> str:
        ts_str = ts.strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"

        level = f"{record.levelname:8s}"
        if self.use_color:
            level = f"{_LEVEL_COLORS.get(record.levelname, '')}{level}{_RESET}"

        parts = [ts_str, "|", level, "|"]
        if context:
            parts.append(" ".join(f"{k}={v}" for k, v in context.items()))
            parts.append("|")
        parts.append(record.getMessage())

        line = " ".join(parts)
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    *,
    json: bool = False,
    color: bool = True,
    to_stderr: bool = True,
    rotate: Optional[Dict[str, Any]] = None,
    context: Optional[Dict[str, Any]] = None,
) -> List[logging.Handler]:
    """Configure the root logger.

    Parameters
    ----------
    level : str
        "DEBUG", "INFO", "WARNING", "ERROR" or "CRITICAL"
    log_file : str, optional
        File to log to in addition to the console; parent dirs are created
    json : bool
        Emit JSON lines instead of the human format (file and console)
    color : bool
        Color level names on the console
    to_stderr : bool
        Attach a console handler on stderr
    rotate : dict, optional
        ``{"mode": "size", "max_bytes": 10_000_000, "backup_count": 3}`` or
        ``{"mode": "time", "when": "D", "interval": 1, "backup_count": 7}``
    context : dict, optional
        Initial contextual fields, e.g. ``{"cmd": "render"}``

    Returns
    -------
    list[logging.Handler]
        Handlers attached to the root logger

    Raises
    ------
    ValueError
        If *level* or the rotation mode is unknown
    """
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {level!r}")

    fmt_mode = "json" if json else "human"
    handlers: List[logging.Handler] = []

    if log_file:
        file_handler = _create_file_handler(log_file, rotate)
        file_handler.setFormatter(ContextFormatter(fmt_mode, use_color=False))
        handlers.append(file_handler)

    if to_stderr:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(ContextFormatter(fmt_mode, use_color=color))
        handlers.append(console)

    root = logging.getLogger()
    for handler in _installed:
        root.removeHandler(handler)
        handler.close()
    _installed[:] = handlers

    root.setLevel(numeric)
    for handler in handlers:
        root.addHandler(handler)

    if context:
        push_context(**context)

    logging.captureWarnings(True)
    return list(_installed)


def _create_file_handler(log_file: str, rotate: Optional[Dict[str, Any]]) -> logging.Handler:
    path = Path(log_file)
    path.parent.mkdir(parents=True, exist_ok=True)

    if not rotate:
        return logging.FileHandler(path, encoding="utf-8")

    mode = rotate.get("mode", "size")
    if mode == "size":
        return logging.handlers.RotatingFileHandler(
            path,
            maxBytes=rotate.get("max_bytes", 10_000_000),
            backupCount=rotate.get("backup_count", 3),
            encoding="utf-8",
        )
    if mode == "time":
        return logging.handlers.TimedRotatingFileHandler(
            path,
            when=rotate.get("when", "D"),
            interval=rotate.get("interval", 1),
            backupCount=rotate.get("backup_count", 7),
            encoding="utf-8",
        )
    raise ValueError(f"Unknown rotation mode: {mode}. Use 'size' or 'time'.")


def get_logger(name: str) -> logging.Logger:
    """Return the logger for *name* (typically ``__name__``)."""
    return logging.getLogger(name)


def push_context(**kwargs: Any) -> None:
    """Add contextual fields to all subsequent log records.

    Examples
    --------
    >>> push_context(cmd="render")
    >>> push_context(input="sprite.px")  # both fields now appear
    """
    _context_var.set({**_context_var.get(), **kwargs})


def pop_context(keys: Optional[List[str]] = None) -> None:
    """Remove contextual fields; all of them when *keys* is None."""
    if keys is None:
        _context_var.set({})
        return
    current = dict(_context_var.get())
    for key in keys:
        current.pop(key, None)
    _context_var.set(current)
