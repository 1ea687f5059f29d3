"""Derived per-player statistics."""
from dataclasses import dataclass, field
from typing import Optional
from .identity import Identity
from .rank_entry import RankEntry
from ..enums import Role


def _empty_lanes() -> dict[Role, int]:
    return {role: 0 for role in Role}


@dataclass(frozen=True)
class ScoreBreakdown:
    """The five terms that sum to ``team_contribution``."""

    tier_score: float = 0.0
    kda_bonus: float = 0.0
    win_rate_bonus: float = 0.0
    activity_bonus: float = 0.0
    role_stats_bonus: float = 0.0

    @property
    def total(self) -> float:
        return (self.tier_score + self.kda_bonus + self.win_rate_bonus
                + self.activity_bonus + self.role_stats_bonus)

    def to_dict(self) -> dict:
        return {
            'tier_score': round(self.tier_score, 2),
            'kda_bonus': round(self.kda_bonus, 2),
            'win_rate_bonus': round(self.win_rate_bonus, 2),
            'activity_bonus': round(self.activity_bonus, 2),
            'role_stats_bonus': round(self.role_stats_bonus, 2),
        }


@dataclass(eq=False)
class PlayerStats:
    """Result of analyzing one identity.

    Compared by identity: two placeholders with identical numbers are still
    two different players when teams are drafted.
    """

    identity: Identity
    puuid: Optional[str] = None
    resolved: bool = True
    rank: Optional[RankEntry] = None

    avg_kills: float = 0.0
    avg_deaths: float = 0.0
    avg_assists: float = 0.0
    avg_cs_per_minute: float = 0.0
    avg_vision_per_minute: float = 0.0
    kda: float = 0.0
    win_rate: float = 0.0

    lane_distribution: dict[Role, int] = field(default_factory=_empty_lanes)
    preferred_lane: Optional[Role] = None
    total_games: int = 0

    team_contribution: float = 0.0
    score: ScoreBreakdown = field(default_factory=ScoreBreakdown)

    @classmethod
    def unresolved(cls, identity: Identity) -> 'PlayerStats':
        """Zero-value placeholder for an identity that could not be resolved."""
        return cls(identity=identity, resolved=False)

    @property
    def name(self) -> str:
        return str(self.identity)

    def lane_count(self, role: Role) -> int:
        return self.lane_distribution.get(role, 0)

    def to_dict(self) -> dict:
        return {
            'game_name': self.identity.game_name,
            'tag_line': self.identity.tag_line,
            'puuid': self.puuid,
            'resolved': self.resolved,
            'rank': self.rank.to_dict() if self.rank else None,
            'avg_kills': self.avg_kills,
            'avg_deaths': self.avg_deaths,
            'avg_assists': self.avg_assists,
            'avg_cs_per_minute': self.avg_cs_per_minute,
            'avg_vision_per_minute': self.avg_vision_per_minute,
            'kda': self.kda,
            'win_rate': self.win_rate,
            'preferred_lane': self.preferred_lane.value if self.preferred_lane else None,
            'lane_distribution': {r.value: n for r, n in self.lane_distribution.items()},
            'total_games': self.total_games,
            'team_contribution': self.team_contribution,
            'score': self.score.to_dict(),
        }
