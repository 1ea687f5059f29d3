"""Progress sinks.

Progress is advisory: publishing never blocks and a failing sink never
interrupts an analysis.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional

from ...domain.interfaces import ProgressEvent, ProgressSink

logger = logging.getLogger(__name__)


class CallbackSink:
    """Adapts a plain ``callback(event)`` function."""

    def __init__(self, callback: Callable[[ProgressEvent], None]) -> None:
        self._callback = callback

    def publish(self, event: ProgressEvent) -> None:
        self._callback(event)


class QueueSink:
    """Pushes events onto an unbounded asyncio queue for another task to drain,
    e.g. a server-sent-events writer."""

    def __init__(self, queue: Optional[asyncio.Queue] = None) -> None:
        self.queue: asyncio.Queue = queue if queue is not None else asyncio.Queue()

    def publish(self, event: ProgressEvent) -> None:
        try:
            self.queue.put_nowait(event)
        except asyncio.QueueFull:
            logger.debug(f"progress queue full, dropped: {event.message}")


class PrefixedSink:
    """Prefixes every message, used to tag per-player events with the player."""

    def __init__(self, inner: ProgressSink, prefix: str) -> None:
        self._inner = inner
        self._prefix = prefix

    def publish(self, event: ProgressEvent) -> None:
        self._inner.publish(ProgressEvent(f"{self._prefix}: {event.message}", event.percent))


def notify(sink: Optional[ProgressSink], message: str, percent: Optional[int] = None) -> None:
    """Publish to ``sink``; errors raised by the sink are logged and dropped."""
    if sink is None:
        return
    try:
        sink.publish(ProgressEvent(message, percent))
    except Exception as e:
        logger.warning(f"progress sink failed, event dropped: {e}")
