"""Domain entities."""
from .identity import Identity, AccountRef
from .rank_entry import RankEntry
from .match import MatchRecord, ParticipantRow
from .player_stats import PlayerStats, ScoreBreakdown
from .team import Team

__all__ = [
    'Identity',
    'AccountRef',
    'RankEntry',
    'MatchRecord',
    'ParticipantRow',
    'PlayerStats',
    'ScoreBreakdown',
    'Team',
]
