from __future__ import annotations

import json
import logging
import time
from typing import Any, Dict

from .context import get_context


def _record_context(record: logging.LogRecord) -> Dict[str, Any]:
    ctx = getattr(record, "context", None)
    return ctx if isinstance(ctx, dict) else get_context()

_LEVEL_COLORS = {
    "DEBUG": "\033[37m",
    "INFO": "\033[36m",
    "SUCCESS": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}
_RESET = "\033[0m"


def _record_metadata(record: logging.LogRecord) -> Dict[str, Any]:
    return {
        "timestamp": time.strftime("%Y-%m-%dT%H:%M:%S", time.localtime(record.created)),
        "level": record.levelname,
        "service": getattr(record, "service", None),
        "logger": record.name,
        "function": record.funcName,
        "line_number": record.lineno,
        "task": getattr(record, "taskName", None),
    }


class ConsoleFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        md = _record_metadata(record)
        ctx = _record_context(record)
        color = _LEVEL_COLORS.get(record.levelname, "")
        parts = [
            md["timestamp"],
            md["level"],
            md["service"] or "-",
            f"{md['logger']}:{md['line_number']}",
            record.getMessage(),
        ]
        if ctx:
            parts.append(" ".join(f"{k}={v}" for k, v in ctx.items()))
        if record.exc_info:
            parts.append(self.formatException(record.exc_info))
        return f"{color}{' | '.join(parts)}{_RESET}"


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = _record_metadata(record)
        payload["message"] = record.getMessage()
        ctx = _record_context(record)
        if ctx:
            payload["context"] = ctx
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, separators=(",", ":"))
