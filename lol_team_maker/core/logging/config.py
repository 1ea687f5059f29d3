from __future__ import annotations

import logging
import os
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler
from pathlib import Path
from queue import Queue
from typing import Optional

from .formatter import ConsoleFormatter, JSONFormatter
from .logger import register_levels, to_level

_listener: QueueListener | None = None

# httpx logs every request at INFO; that is one line per Riot call
_NOISY_LOGGERS = ("httpx", "httpcore")


def bootstrap_logging(
    *,
    level: str | int | None = None,
    console: Optional[bool] = None,
    log_dir: Optional[Path] = None,
    log_file_name: str = "team_maker.jsonl",
    max_bytes: int = 5_000_000,
    backup_count: int = 5,
) -> None:
    """Configure the root logger: optional colored console output plus a
    rotating JSON-lines file fed through a background queue listener."""
    global _listener
    shutdown_logging()
    register_levels()

    root = logging.getLogger()
    root.handlers.clear()
    lvl = to_level(level or os.getenv("LOG_LEVEL", "INFO"))
    root.setLevel(lvl)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    if console is None:
        console = os.getenv("LOG_CONSOLE", "false").strip().lower() == "true"
    if console:
        handler = logging.StreamHandler()
        console_level = os.getenv("LOG_CONSOLE_LEVEL", "")
        handler.setLevel(to_level(console_level) if console_level else lvl)
        handler.setFormatter(ConsoleFormatter())
        root.addHandler(handler)

    if log_dir:
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            str(log_dir / log_file_name), maxBytes=max_bytes, backupCount=backup_count
        )
        file_handler.setLevel(lvl)
        file_handler.setFormatter(JSONFormatter())
        q: Queue[logging.LogRecord] = Queue(-1)
        root.addHandler(QueueHandler(q))
        _listener = QueueListener(q, file_handler, respect_handler_level=True)
        _listener.start()


def shutdown_logging() -> None:
    global _listener
    if _listener is not None:
        _listener.stop()
        _listener = None
