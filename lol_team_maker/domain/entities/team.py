"""Team entity produced by the balancer."""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional
from .player_stats import PlayerStats
from ..enums import Role


@dataclass(frozen=True)
class Team:
    """A drafted team of five with its lane assignment."""

    team_number: int  # 1-based
    members: tuple[PlayerStats, ...]
    avg_score: float
    lane_assignment: Mapping[Role, PlayerStats] = field(default_factory=lambda: MappingProxyType({}))

    def player_for(self, role: Role) -> Optional[PlayerStats]:
        return self.lane_assignment.get(role)

    def to_dict(self) -> dict:
        return {
            'team_number': self.team_number,
            'avg_score': self.avg_score,
            'members': [p.to_dict() for p in self.members],
            'lane_assignment': {
                role.value: str(player.identity)
                for role, player in self.lane_assignment.items()
            },
        }
