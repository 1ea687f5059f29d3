"""Rank entry for one ranked queue."""
from dataclasses import dataclass
from typing import Optional
from ..enums import Division, QueueType, Tier


@dataclass(frozen=True)
class RankEntry:
    """A player's standing in one ranked queue for the current season."""

    queue: QueueType
    tier: Tier
    division: Optional[Division]  # None for Master and above
    league_points: int = 0
    wins: int = 0
    losses: int = 0

    @property
    def season_games(self) -> int:
        return self.wins + self.losses

    @property
    def display(self) -> str:
        if self.tier.is_apex or self.division is None:
            return f"{self.tier.value} {self.league_points}LP"
        return f"{self.tier.value} {self.division.value} {self.league_points}LP"

    def to_dict(self) -> dict:
        return {
            'queue': self.queue.api_queue_name,
            'tier': self.tier.value,
            'division': self.division.value if self.division else None,
            'league_points': self.league_points,
            'wins': self.wins,
            'losses': self.losses,
        }
