"""Infrastructure layer - API client, rate limiting, caching and repositories."""
from .api import RiotAPIClient, RateLimiter, RateLimitedFetcher, build_fetcher
from .cache import ResultCache
from .repositories import MatchRepository, AccountRepository

__all__ = [
    'RiotAPIClient',
    'RateLimiter',
    'RateLimitedFetcher',
    'build_fetcher',
    'ResultCache',
    'MatchRepository',
    'AccountRepository',
]
