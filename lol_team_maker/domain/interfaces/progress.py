"""Progress notification contract."""
from dataclasses import dataclass
from typing import Optional, Protocol, runtime_checkable


@dataclass(frozen=True)
class ProgressEvent:
    """A human-readable status line. ``percent`` is set for batch-level events."""

    message: str
    percent: Optional[int] = None


@runtime_checkable
class ProgressSink(Protocol):
    """Receives progress events. Must not block; may drop events."""

    def publish(self, event: ProgressEvent) -> None: ...
