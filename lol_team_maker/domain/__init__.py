"""Domain layer - Business entities, enums, errors and interfaces."""
from .entities import (
    Identity, AccountRef, RankEntry, MatchRecord, ParticipantRow,
    PlayerStats, ScoreBreakdown, Team,
)
from .enums import Region, QueueType, Tier, Division, Role
from .errors import (
    TeamMakerError, FetchError, Throttled, UpstreamRejected,
    ResolutionFailure, InvalidInput, InsufficientResults, BatchTimeout,
)
from .interfaces import RiotDataSource, ProgressEvent, ProgressSink

__all__ = [
    # Entities
    'Identity',
    'AccountRef',
    'RankEntry',
    'MatchRecord',
    'ParticipantRow',
    'PlayerStats',
    'ScoreBreakdown',
    'Team',
    # Enums
    'Region',
    'QueueType',
    'Tier',
    'Division',
    'Role',
    # Errors
    'TeamMakerError',
    'FetchError',
    'Throttled',
    'UpstreamRejected',
    'ResolutionFailure',
    'InvalidInput',
    'InsufficientResults',
    'BatchTimeout',
    # Interfaces
    'RiotDataSource',
    'ProgressEvent',
    'ProgressSink',
]
