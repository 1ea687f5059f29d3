from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Protocol

from .context import bind as bind_ctx, get_context


# Between INFO and WARNING: a milestone worth seeing at the default level
SUCCESS = 25


def register_levels() -> None:
    if logging.getLevelName(SUCCESS) != "SUCCESS":
        logging.addLevelName(SUCCESS, "SUCCESS")


def to_level(value: int | str) -> int:
    """Level number for a name such as ``"debug"`` or ``"success"``; unknown names give INFO."""
    if isinstance(value, int):
        return value
    register_levels()
    level = logging.getLevelName(value.strip().upper())
    return level if isinstance(level, int) else logging.INFO


class SupportsStr(Protocol):
    def __str__(self) -> str: ...


Message = SupportsStr | Callable[[], SupportsStr]


class StructuredLogger:
    """Thin wrapper over a stdlib logger that tags records with a service name
    and accepts lazily-built messages (a zero-arg callable)."""

    def __init__(self, logger: logging.Logger, service: Optional[str] = None) -> None:
        self._logger = logger
        self._service = service

    @property
    def name(self) -> str:
        return self._logger.name

    def bind(self, **values: Any) -> "StructuredLogger":
        bind_ctx(**values)
        return self

    def _log(self, level: int, msg: Message, *args: Any, **kwargs: Any) -> None:
        if not self._logger.isEnabledFor(level):
            return
        message = msg() if callable(msg) else msg
        extra = kwargs.pop("extra", {})
        if self._service and "service" not in extra:
            extra["service"] = self._service
        # Captured here: file records are formatted later on the listener thread
        ctx = get_context()
        if ctx and "context" not in extra:
            extra["context"] = ctx
        self._logger.log(level, str(message), *args, extra=extra, stacklevel=3, **kwargs)

    def debug(self, msg: Message, *args: Any, **kwargs: Any) -> None:
        self._log(logging.DEBUG, msg, *args, **kwargs)

    def info(self, msg: Message, *args: Any, **kwargs: Any) -> None:
        self._log(logging.INFO, msg, *args, **kwargs)

    def success(self, msg: Message, *args: Any, **kwargs: Any) -> None:
        self._log(SUCCESS, msg, *args, **kwargs)

    def warning(self, msg: Message, *args: Any, **kwargs: Any) -> None:
        self._log(logging.WARNING, msg, *args, **kwargs)

    def error(self, msg: Message, *args: Any, **kwargs: Any) -> None:
        self._log(logging.ERROR, msg, *args, **kwargs)

    def exception(self, msg: Message, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault("exc_info", True)
        self._log(logging.ERROR, msg, *args, **kwargs)


def get_logger(name: str, *, service: Optional[str] = None) -> StructuredLogger:
    return StructuredLogger(logging.getLogger(name), service=service)
