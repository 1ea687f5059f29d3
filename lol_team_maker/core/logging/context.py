from __future__ import annotations

import contextvars
from contextlib import contextmanager
from typing import Any, Dict, Iterator

# asyncio tasks copy the current context when created, so values bound inside
# one player's analysis stay out of the analyses running beside it.
_bound: contextvars.ContextVar[Dict[str, Any]] = contextvars.ContextVar("log_context", default={})


def get_context() -> Dict[str, Any]:
    return dict(_bound.get())


def _merged(values: Dict[str, Any]) -> Dict[str, Any]:
    merged = get_context()
    merged.update((k, v) for k, v in values.items() if v is not None)
    return merged


def bind(**values: Any) -> None:
    """Bind for the rest of the current task."""
    _bound.set(_merged(values))


@contextmanager
def context(**values: Any) -> Iterator[Dict[str, Any]]:
    """Bind for the duration of a ``with`` block."""
    token = _bound.set(_merged(values))
    try:
        yield _bound.get()
    finally:
        _bound.reset(token)
