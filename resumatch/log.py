"""Logging setup shared by the API server and the Streamlit UI.

Console output always goes to stdout. A daily file under ``logs/`` is added
unless ``LOG_TO_FILE=0``; the directory can be moved with ``LOG_DIR``.
"""
from __future__ import annotations

import logging
import os
import sys
from datetime import datetime
from pathlib import Path

_DEFAULT_LOG_DIR = Path(__file__).resolve().parent.parent / "logs"
_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"
_DATE_FMT = "%Y-%m-%d %H:%M:%S"

# SDK request logs would otherwise echo every Gemini / JSearch call at INFO
_CHATTY_LOGGERS = ("httpx", "httpcore", "openai", "urllib3")

_configured = False


def get_logger(name: str) -> logging.Logger:
    """Return a named logger; configures root handlers on first call."""
    global _configured
    if not _configured:
        _configure()
        _configured = True
    return logging.getLogger(name)


def _file_handler(level: int) -> logging.Handler | None:
    if os.environ.get("LOG_TO_FILE", "1").strip().lower() in {"0", "false", "no", "off"}:
        return None
    log_dir = Path(os.environ.get("LOG_DIR") or _DEFAULT_LOG_DIR)
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_dir / f"resumatch_{datetime.now():%Y-%m-%d}.log", encoding="utf-8")
    except OSError:
        return None
    fh.setLevel(min(level, logging.DEBUG))
    return fh


def _configure() -> None:
    level = getattr(logging, os.environ.get("LOG_LEVEL", "INFO").upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(level)

    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    # uvicorn / streamlit may have installed handlers already
    if root.handlers:
        return

    formatter = logging.Formatter(_FORMAT, datefmt=_DATE_FMT)
    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(formatter)
    root.addHandler(console)

    fh = _file_handler(level)
    if fh is not None:
        fh.setFormatter(formatter)
        root.addHandler(fh)
