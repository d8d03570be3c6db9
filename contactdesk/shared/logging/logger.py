"""Structured logging utilities.

Every record carries the correlation id of the request (or relay connection)
that emitted it; stdlib ``logging`` output from Flask, werkzeug and
websockets is routed through the same loguru sinks.
"""

from __future__ import annotations

import logging
import os
import sys
from contextvars import ContextVar
from pathlib import Path
from typing import Any

from loguru import logger

from .sensitive_filter import sanitize_record

_FMT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<lvl>{level:<8}</lvl> | "
    "<magenta>{extra[correlation_id]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<lvl>{message}</lvl>"
)

_NO_CORRELATION = "-"
_CORRELATION_ID: ContextVar[str] = ContextVar("correlation_id", default=_NO_CORRELATION)

_QUIET_LIBRARIES = {"werkzeug": logging.INFO, "websockets": logging.WARNING}


def _attach_correlation_id(record: dict[str, Any]) -> None:
    record["extra"].setdefault("correlation_id", _CORRELATION_ID.get())


logger.configure(patcher=_attach_correlation_id)


def _log_file_path() -> Path:
    configured = os.getenv("LOG_FILE")
    if configured:
        return Path(configured)
    return Path(__file__).resolve().parents[2] / "instance" / "contactdesk.log"


class _InterceptHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.opt(depth=6, exception=record.exc_info).log(level, record.getMessage())


def set_correlation_id(value: str | None) -> None:
    _CORRELATION_ID.set(value or _NO_CORRELATION)


def get_correlation_id() -> str:
    return _CORRELATION_ID.get()


def clear_correlation_id() -> None:
    _CORRELATION_ID.set(_NO_CORRELATION)


def setup_logging(level: str | None = None, *, to_file: bool = True) -> None:
    """(Re)configure the sinks; safe to call once per app instance."""
    level = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    sink_options: dict[str, Any] = {
        "level": level,
        "format": _FMT,
        "filter": sanitize_record,
        "backtrace": False,
        "diagnose": False,
    }

    logger.remove()
    logger.add(sys.stderr, colorize=True, **sink_options)
    if to_file:
        log_file = _log_file_path()
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(log_file, colorize=False, enqueue=True, encoding="utf-8", **sink_options)

    logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)
    for name, library_level in _QUIET_LIBRARIES.items():
        logging.getLogger(name).setLevel(library_level)


__all__ = [
    "logger",
    "setup_logging",
    "set_correlation_id",
    "clear_correlation_id",
    "get_correlation_id",
]
