"""Rate limiting matching Riot's personal-key budget."""
import asyncio
import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator, Awaitable, Callable, Optional, Tuple, TypeVar

from ...domain.errors import Throttled

logger = logging.getLogger(__name__)

T = TypeVar("T")
Clock = Callable[[], float]
Sleep = Callable[[float], Awaitable[None]]


class RateLimiter:
    """
    Token bucket behind a single FIFO admission queue.

      - reservoir       : burst capacity (tokens available at once)
      - refresh_amount  : tokens restored every refresh_interval seconds
      - min_interval    : spacing between two consecutive dispatches
      - max_concurrent  : requests allowed in flight at the same time

    Riot's binding limit is 100 calls / 120 s, not 20 / 1 s, so the
    defaults pace dispatches at 1.2 s and refill the whole bucket once
    per 2-minute window.

    ``clock`` and ``sleep`` are injectable so tests can run on a fake
    timeline instead of real seconds.
    """

    def __init__(
        self,
        reservoir: int = 100,
        refresh_amount: int = 100,
        refresh_interval: float = 120.0,
        min_interval: float = 0.0,
        max_concurrent: int = 1,
        *,
        clock: Clock = time.monotonic,
        sleep: Sleep = asyncio.sleep,
    ):
        if reservoir < 1 or refresh_amount < 1 or max_concurrent < 1:
            raise ValueError("reservoir, refresh_amount and max_concurrent must be positive")
        if refresh_interval <= 0:
            raise ValueError("refresh_interval must be positive")

        self.reservoir = reservoir
        self.refresh_amount = refresh_amount
        self.refresh_interval = refresh_interval
        self.min_interval = max(0.0, min_interval)
        self.max_concurrent = max_concurrent

        self._clock = clock
        self._sleep = sleep
        self._tokens = reservoir
        self._next_refresh = clock() + refresh_interval
        self._last_dispatch: Optional[float] = None
        self._paused_until = 0.0
        self._running = 0

        # asyncio.Lock wakes waiters in arrival order: this is the FIFO queue
        self._admission = asyncio.Lock()
        self._slots = asyncio.Semaphore(max_concurrent)

    # ------------------------------------------------------------------ #
    # Admission
    # ------------------------------------------------------------------ #

    async def acquire(self) -> None:
        """Wait for a token, spacing and a free slot, then take all three."""
        async with self._admission:
            await self._slots.acquire()
            try:
                while True:
                    now = self._clock()
                    self._refill(now)
                    delay = self._delay(now)
                    if delay <= 0:
                        break
                    logger.debug(f"Rate limit: waiting {delay:.2f}s")
                    await self._sleep(delay)
            except BaseException:
                self._slots.release()
                raise
            self._tokens -= 1
            self._last_dispatch = now
            self._running += 1

    def release(self) -> None:
        self._running -= 1
        self._slots.release()

    @asynccontextmanager
    async def slot(self) -> AsyncIterator[None]:
        await self.acquire()
        try:
            yield
        finally:
            self.release()

    def pause(self, seconds: float) -> None:
        """Hold back every queued request for ``seconds`` from now."""
        until = self._clock() + max(0.0, seconds)
        if until > self._paused_until:
            self._paused_until = until
            logger.info(f"Rate limit: queue paused for {seconds:g}s")

    # ------------------------------------------------------------------ #
    # Bookkeeping
    # ------------------------------------------------------------------ #

    def _refill(self, now: float) -> None:
        if now < self._next_refresh:
            return
        periods = int((now - self._next_refresh) // self.refresh_interval) + 1
        self._tokens = min(self.reservoir, self._tokens + periods * self.refresh_amount)
        self._next_refresh += periods * self.refresh_interval

    def _delay(self, now: float) -> float:
        if self._paused_until > now:
            return self._paused_until - now
        if self._last_dispatch is not None and self.min_interval > 0:
            gap = self._last_dispatch + self.min_interval - now
            if gap > 0:
                return gap
        if self._tokens <= 0:
            return self._next_refresh - now
        return 0.0

    def get_status(self) -> Tuple[int, int, int, float]:
        """(tokens left, reservoir, requests in flight, seconds of pause left)."""
        now = self._clock()
        self._refill(now)
        return self._tokens, self.reservoir, self._running, max(0.0, self._paused_until - now)


class RateLimitedFetcher:
    """Runs upstream requests through a :class:`RateLimiter`.

    A :class:`Throttled` failure pauses the whole queue for the server's
    ``Retry-After`` (or ``default_retry_after``) and the request is
    resubmitted, as many times as it takes. Any other exception is
    terminal and propagates unchanged.
    """

    def __init__(self, limiter: RateLimiter, *, default_retry_after: float = 10.0):
        self.limiter = limiter
        self.default_retry_after = default_retry_after
        self.throttle_count = 0

    async def submit(self, request: Callable[[], Awaitable[T]], *, label: str = "") -> T:
        attempt = 0
        while True:
            attempt += 1
            async with self.limiter.slot():
                try:
                    return await request()
                except Throttled as exc:
                    wait = exc.retry_after if exc.retry_after is not None else self.default_retry_after
                    self.throttle_count += 1
                    # Paused before the slot is released so nothing else slips through
                    self.limiter.pause(wait)
                    logger.warning(f"429 rate-limited, retrying {label or exc.url} in {wait:g}s (attempt {attempt})")
