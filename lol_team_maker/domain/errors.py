"""Exception hierarchy.

Per-resource failures (one account, one match) are raised by the
infrastructure layer and absorbed by the analyzer; only batch-level
conditions reach the caller.
"""
from __future__ import annotations

from typing import Optional


class TeamMakerError(Exception):
    """Base class for every error raised by this package."""


# ── Upstream ────────────────────────────────────────────────────────────


class FetchError(TeamMakerError):
    """An upstream request did not produce a usable payload."""

    def __init__(self, message: str, *, url: Optional[str] = None) -> None:
        super().__init__(message)
        self.url = url


class Throttled(FetchError):
    """429 from upstream. Retried by the fetcher, never surfaced to callers."""

    def __init__(self, retry_after: Optional[float] = None, *, url: Optional[str] = None) -> None:
        hint = f"{retry_after:g}s" if retry_after is not None else "no hint"
        super().__init__(f"rate limited ({hint})", url=url)
        self.retry_after = retry_after


class UpstreamRejected(FetchError):
    """Terminal upstream failure: not found, forbidden, malformed, server error
    or transport error (``status_code`` is None for the last two kinds)."""

    def __init__(self, message: str, *, status_code: Optional[int] = None, url: Optional[str] = None) -> None:
        super().__init__(message, url=url)
        self.status_code = status_code

    @property
    def not_found(self) -> bool:
        return self.status_code == 404


# ── Per-player ──────────────────────────────────────────────────────────


class ResolutionFailure(TeamMakerError):
    """An identity could not be mapped to an account."""

    def __init__(self, identity: object, cause: Optional[BaseException] = None) -> None:
        super().__init__(f"could not resolve {identity}")
        self.identity = identity
        self.cause = cause


# ── Batch ───────────────────────────────────────────────────────────────


class InvalidInput(TeamMakerError):
    """The batch violates the size constraints; nothing was processed."""


class InsufficientResults(TeamMakerError):
    """Too few players could be analyzed for the batch to be balanced."""

    def __init__(self, resolved: int, required: int) -> None:
        super().__init__(
            f"not enough players analyzed: {resolved} resolved, {required} required"
        )
        self.resolved = resolved
        self.required = required


class BatchTimeout(TeamMakerError):
    """The caller-level timeout elapsed before every analysis finished."""

    def __init__(self, timeout: float) -> None:
        super().__init__(f"analysis did not finish within {timeout:g}s")
        self.timeout = timeout
