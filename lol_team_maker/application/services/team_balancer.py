"""Splits analyzed players into balanced teams of five."""
from __future__ import annotations

import math
from types import MappingProxyType
from typing import Dict, List, Optional, Sequence

from ...core.logging import get_logger
from ...domain.entities import PlayerStats, Team
from ...domain.enums import Role
from ...domain.errors import InvalidInput

logger = get_logger(__name__, service="balancer")

TEAM_SIZE = 5
MIN_PLAYERS = 10


def snake_order(team_count: int) -> List[int]:
    """One full snake cycle: 0..n-1 then n-1..0."""
    return list(range(team_count)) + list(range(team_count - 1, -1, -1))


def validate_player_count(count: int, team_size: int = TEAM_SIZE, min_players: int = MIN_PLAYERS) -> None:
    if count < min_players or count % team_size != 0:
        raise InvalidInput(
            f"need at least {min_players} players in multiples of {team_size}, got {count}"
        )


def balance_label(balance: float) -> str:
    """Narrative for the balance metric. Presentation only."""
    if balance < 5:
        return "excellent"
    if balance < 10:
        return "good"
    return "fair"


class TeamBalancer:
    """
    Balancing happens in three steps:

    1. stable sort by team_contribution, highest first
    2. snake draft: team 0, 1, ..., n-1, n-1, ..., 0, 0, 1, ...
    3. per team, a greedy lane assignment by games played per lane

    Deterministic for a given input order.
    """

    def __init__(self, team_size: int = TEAM_SIZE, min_players: int = MIN_PLAYERS):
        self.team_size = team_size
        self.min_players = min_players

    def divide(self, players: Sequence[PlayerStats]) -> List[Team]:
        validate_player_count(len(players), self.team_size, self.min_players)

        team_count = len(players) // self.team_size
        # sorted() is stable, so equal scores keep their input order
        ranked = sorted(players, key=lambda p: p.team_contribution, reverse=True)

        order = snake_order(team_count)
        rosters: List[List[PlayerStats]] = [[] for _ in range(team_count)]
        for pick, player in enumerate(ranked):
            rosters[order[pick % len(order)]].append(player)

        teams = []
        for index, roster in enumerate(rosters):
            avg = sum(p.team_contribution for p in roster) / len(roster)
            teams.append(Team(
                team_number=index + 1,
                members=tuple(roster),
                avg_score=round(avg, 2),
                lane_assignment=MappingProxyType(self.assign_lanes(roster)),
            ))

        logger.info(lambda: f"divided {len(players)} players into {team_count} teams, "
                            f"averages {[t.avg_score for t in teams]}")
        return teams

    @staticmethod
    def assign_lanes(members: Sequence[PlayerStats]) -> Dict[Role, PlayerStats]:
        """
        Two passes over the lanes in fixed order.

        Pass one gives each lane to the remaining member who played it most,
        leaving it open if nobody left has played it. Pass two fills the open
        lanes with whoever is left.

        Members are first put in a fixed order (score, highest first, then
        Riot ID), so the result depends only on who is on the team and
        re-running on an assigned team gives back the same lanes.
        """
        unassigned = sorted(members, key=_lane_priority)
        assignment: Dict[Role, Optional[PlayerStats]] = {role: None for role in Role}

        for role in Role:
            best = TeamBalancer._best_for_lane(unassigned, role)
            if best is not None:
                assignment[role] = best
                unassigned.remove(best)

        for role in Role:
            if assignment[role] is None and unassigned:
                assignment[role] = unassigned.pop(0)

        return {role: player for role, player in assignment.items() if player is not None}

    @staticmethod
    def _best_for_lane(candidates: Sequence[PlayerStats], role: Role) -> Optional[PlayerStats]:
        best: Optional[PlayerStats] = None
        best_count = 0
        for player in candidates:
            count = player.lane_count(role)
            if count > best_count:
                best, best_count = player, count
        return best

    @staticmethod
    def balance(teams: Sequence[Team]) -> float:
        """Population standard deviation of team averages. Lower is fairer."""
        if not teams:
            return 0.0
        averages = [t.avg_score for t in teams]
        mean = sum(averages) / len(averages)
        variance = sum((a - mean) ** 2 for a in averages) / len(averages)
        return math.sqrt(variance)


def _lane_priority(player: PlayerStats) -> tuple:
    return (-player.team_contribution, player.name)
