"""
League of Legends Team Maker
============================

Analyzes a lobby of Riot IDs against the Riot Games API and splits the
players into balanced teams of five.

Features:
- Clean Architecture (Domain → Infrastructure → Application → Presentation)
- Async API calls under one process-wide rate budget
- De-duplicated account and match lookups
- Deterministic snake draft with lane assignment

Version: 1.0.0
"""

__version__ = "1.0.0"

from .domain import (
    Identity, PlayerStats, Team, Region, Role,
    TeamMakerError, InvalidInput, InsufficientResults, BatchTimeout,
)

from .infrastructure import (
    RiotAPIClient,
    RateLimitedFetcher,
    ResultCache,
)

from .application import (
    PlayerAnalyzer,
    TeamBalancer,
    AnalyzeAndBalanceUseCase,
    BalanceResult,
)

from .config import settings

__all__ = [
    # Version info
    '__version__',

    # Domain
    'Identity',
    'PlayerStats',
    'Team',
    'Region',
    'Role',
    'TeamMakerError',
    'InvalidInput',
    'InsufficientResults',
    'BatchTimeout',

    # Infrastructure
    'RiotAPIClient',
    'RateLimitedFetcher',
    'ResultCache',

    # Application
    'PlayerAnalyzer',
    'TeamBalancer',
    'AnalyzeAndBalanceUseCase',
    'BalanceResult',

    # Config
    'settings',
]
