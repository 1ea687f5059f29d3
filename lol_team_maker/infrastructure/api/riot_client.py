"""Riot Games API client."""
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from ...config import settings
from ...domain.enums import QueueType, Region
from ...domain.errors import Throttled, UpstreamRejected
from ...domain.interfaces import RiotDataSource
from .rate_limiter import RateLimitedFetcher, RateLimiter

logger = logging.getLogger(__name__)


def _parse_retry_after(value: Optional[str]) -> Optional[float]:
    if value is None:
        return None
    try:
        seconds = float(value)
    except ValueError:
        return None
    return seconds if seconds >= 0 else None


def build_fetcher() -> RateLimitedFetcher:
    """Process-wide fetcher configured from settings."""
    limiter = RateLimiter(
        reservoir=settings.RATE_LIMIT_RESERVOIR,
        refresh_amount=settings.RATE_LIMIT_REFRESH_AMOUNT,
        refresh_interval=settings.RATE_LIMIT_REFRESH_INTERVAL,
        min_interval=settings.RATE_LIMIT_MIN_INTERVAL,
        max_concurrent=settings.MAX_CONCURRENT_REQUESTS,
    )
    return RateLimitedFetcher(limiter, default_retry_after=settings.DEFAULT_RETRY_AFTER)


class RiotAPIClient(RiotDataSource):
    """Asynchronous Riot API client. Every call goes through the shared fetcher."""

    def __init__(
        self,
        api_key: str,
        region: Region = Region.KR,
        *,
        fetcher: Optional[RateLimitedFetcher] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.region = region
        self.fetcher = fetcher or build_fetcher()
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT
        self.session: Optional[httpx.AsyncClient] = None
        self._transport = transport

    async def __aenter__(self):
        self.session = httpx.AsyncClient(
            timeout=self.timeout,
            headers={"X-Riot-Token": self.api_key},
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *_):
        if self.session:
            await self.session.aclose()
            self.session = None

    def _get_platform_url(self) -> str:
        return f"https://{self.region.platform_route}.api.riotgames.com"

    def _get_regional_url(self) -> str:
        return f"https://{self.region.regional_route}.api.riotgames.com"

    def _get_account_url(self) -> str:
        return f"https://{self.region.account_route}.api.riotgames.com"

    async def _make_request(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        endpoint_type: str = "default",
    ) -> Any:
        return await self.fetcher.submit(
            lambda: self._send(url, params), label=f"{endpoint_type} {url}"
        )

    async def _send(self, url: str, params: Optional[Dict[str, Any]]) -> Any:
        """One HTTP attempt, with the status code mapped onto the error taxonomy."""
        if self.session is None:
            raise RuntimeError("RiotAPIClient must be used as an async context manager")

        try:
            response = await self.session.get(url, params=params)
        except httpx.HTTPError as exc:
            logger.error(f"Network error: {exc}")
            raise UpstreamRejected(f"network error: {exc}", url=url) from exc

        if response.status_code == 200:
            try:
                return response.json()
            except ValueError as exc:
                raise UpstreamRejected("malformed JSON body", status_code=200, url=url) from exc

        if response.status_code == 429:
            raise Throttled(_parse_retry_after(response.headers.get("Retry-After")), url=url)

        if response.status_code in (401, 403):
            logger.error(f"HTTP {response.status_code}: check RIOT_API_KEY")
        elif response.status_code != 404:
            logger.warning(f"HTTP {response.status_code} for {url}")

        raise UpstreamRejected(
            f"HTTP {response.status_code}", status_code=response.status_code, url=url
        )

    # ── Account API ────────────────────────────────────────────────────

    async def get_account_by_riot_id(self, game_name: str, tag_line: str) -> Dict[str, Any]:
        base = self._get_account_url()
        name, tag = quote(game_name, safe=""), quote(tag_line, safe="")
        url = f"{base}/riot/account/v1/accounts/by-riot-id/{name}/{tag}"
        data = await self._make_request(url, endpoint_type="account")
        if not isinstance(data, dict):
            raise UpstreamRejected("account payload is not an object", status_code=200, url=url)
        return data

    # ── League API ─────────────────────────────────────────────────────

    async def get_league_entries_by_puuid(self, puuid: str) -> List[Dict[str, Any]]:
        url = f"{self._get_platform_url()}/lol/league/v4/entries/by-puuid/{puuid}"
        data = await self._make_request(url, endpoint_type="league")
        if not isinstance(data, list):
            raise UpstreamRejected("league payload is not a list", status_code=200, url=url)
        return data

    # ── Match API ──────────────────────────────────────────────────────

    async def get_match_ids_by_puuid(
        self,
        puuid: str,
        count: int = 20,
        queue: Optional[QueueType] = None,
    ) -> List[str]:
        url = f"{self._get_regional_url()}/lol/match/v5/matches/by-puuid/{puuid}/ids"
        params: Dict[str, Any] = {"start": 0, "count": min(count, 100)}
        if queue is not None:
            params["queue"] = queue.queue_id
        else:
            params["type"] = "ranked"
        data = await self._make_request(url, params, endpoint_type="match")
        if not isinstance(data, list):
            raise UpstreamRejected("match id payload is not a list", status_code=200, url=url)
        return [str(m) for m in data]

    async def get_match_by_id(self, match_id: str) -> Dict[str, Any]:
        url = f"{self._get_regional_url()}/lol/match/v5/matches/{match_id}"
        data = await self._make_request(url, endpoint_type="match")
        if not isinstance(data, dict):
            raise UpstreamRejected("match payload is not an object", status_code=200, url=url)
        return data
