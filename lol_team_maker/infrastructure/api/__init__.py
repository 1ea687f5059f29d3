"""Infrastructure API module."""
from .riot_client import RiotAPIClient, build_fetcher
from .rate_limiter import RateLimiter, RateLimitedFetcher

__all__ = [
    'RiotAPIClient',
    'build_fetcher',
    'RateLimiter',
    'RateLimitedFetcher',
]
