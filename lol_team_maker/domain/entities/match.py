"""Match record and per-participant performance rows."""
from dataclasses import dataclass, field
from typing import Optional
from ..enums import Role


@dataclass(frozen=True)
class ParticipantRow:
    """One player's line in a match."""

    puuid: str
    kills: int = 0
    deaths: int = 0
    assists: int = 0
    total_minions_killed: int = 0
    neutral_minions_killed: int = 0
    vision_score: int = 0
    individual_position: Optional[Role] = None
    team_position: Optional[Role] = None
    win: bool = False

    @property
    def creep_score(self) -> int:
        """Lane minions plus jungle monsters."""
        return self.total_minions_killed + self.neutral_minions_killed

    @property
    def role(self) -> Optional[Role]:
        """The more specific individual position, else the team position."""
        return self.individual_position or self.team_position


@dataclass(frozen=True)
class MatchRecord:
    """A finished match. Immutable once fetched, so it can be cached for the
    lifetime of the process."""

    match_id: str
    game_duration: int  # Seconds
    participants: tuple[ParticipantRow, ...] = field(default_factory=tuple)
    queue_id: int = 0
    game_creation: int = 0  # Unix timestamp milliseconds

    @property
    def game_duration_minutes(self) -> float:
        return self.game_duration / 60.0

    def participant(self, puuid: str) -> Optional[ParticipantRow]:
        """Row for ``puuid``, or None if that player was not in the match."""
        return next((p for p in self.participants if p.puuid == puuid), None)
