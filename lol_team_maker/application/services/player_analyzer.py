"""Per-player analysis: account → rank → match history → statistics → score."""
from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

from ...config import settings
from ...core.logging import context as log_context, get_logger
from ...domain.entities import (
    AccountRef, Identity, MatchRecord, ParticipantRow, PlayerStats, RankEntry,
)
from ...domain.enums import Role
from ...domain.errors import ResolutionFailure
from ...domain.interfaces import ProgressSink
from ...infrastructure import AccountRepository, MatchRepository
from . import scoring
from .progress import notify

logger = get_logger(__name__, service="analyzer")


@dataclass
class MatchAggregate:
    """Running totals over one player's rows in the analyzed matches."""

    games: int = 0
    wins: int = 0
    kills: int = 0
    deaths: int = 0
    assists: int = 0
    # Rate totals only include games with a positive duration
    timed_games: int = 0
    cs_per_minute_total: float = 0.0
    vision_per_minute_total: float = 0.0
    lanes: dict[Role, int] = field(default_factory=lambda: {role: 0 for role in Role})

    def add(self, row: ParticipantRow, duration_minutes: float) -> None:
        self.games += 1
        self.kills += row.kills
        self.deaths += row.deaths
        self.assists += row.assists
        if row.win:
            self.wins += 1
        if duration_minutes > 0:
            self.timed_games += 1
            self.cs_per_minute_total += row.creep_score / duration_minutes
            self.vision_per_minute_total += row.vision_score / duration_minutes
        role = row.role
        if role is not None:
            self.lanes[role] += 1

    @classmethod
    def from_matches(cls, puuid: str, matches: Iterable[MatchRecord]) -> 'MatchAggregate':
        aggregate = cls()
        for match in matches:
            row = match.participant(puuid)
            if row is not None:
                aggregate.add(row, match.game_duration_minutes)
        return aggregate

    @property
    def avg_kills(self) -> float:
        return self.kills / self.games if self.games else 0.0

    @property
    def avg_deaths(self) -> float:
        return self.deaths / self.games if self.games else 0.0

    @property
    def avg_assists(self) -> float:
        return self.assists / self.games if self.games else 0.0

    @property
    def kda(self) -> float:
        # Deathless players get kills + assists rather than a division by zero
        if self.avg_deaths > 0:
            return (self.avg_kills + self.avg_assists) / self.avg_deaths
        return self.avg_kills + self.avg_assists

    @property
    def win_rate(self) -> float:
        return self.wins / self.games * 100 if self.games else 0.0

    @property
    def cs_per_minute(self) -> float:
        return self.cs_per_minute_total / self.timed_games if self.timed_games else 0.0

    @property
    def vision_per_minute(self) -> float:
        return self.vision_per_minute_total / self.timed_games if self.timed_games else 0.0

    @property
    def preferred_lane(self) -> Optional[Role]:
        best: Optional[Role] = None
        for role in Role:
            if self.lanes[role] > 0 and (best is None or self.lanes[role] > self.lanes[best]):
                best = role
        return best


class PlayerAnalyzer:
    """
    Builds a :class:`PlayerStats` for one identity.

    Never raises for a single player's problems: an unknown account gives
    an unresolved zero-score placeholder, a missing rank counts as
    unranked, and matches that fail to load are left out of the averages.
    """

    def __init__(
        self,
        accounts: AccountRepository,
        matches: MatchRepository,
        *,
        matches_per_player: Optional[int] = None,
    ):
        self.accounts = accounts
        self.matches = matches
        self.matches_per_player = matches_per_player or settings.MATCHES_PER_PLAYER

    async def analyze(self, identity: Identity, progress: Optional[ProgressSink] = None) -> PlayerStats:
        with log_context(player=str(identity)):
            try:
                account = await self.accounts.resolve(identity)
            except ResolutionFailure as e:
                logger.warning(f"analysis failed for {identity}: {e.cause or e}")
                notify(progress, f"analysis failed for {identity}: account not found")
                return PlayerStats.unresolved(identity)

            rank = await self.accounts.get_rank(account.puuid)

            match_ids = await self.matches.get_recent_match_ids(account.puuid, self.matches_per_player)
            notify(progress, f"Fetched match history ({len(match_ids)} games)")
            if not match_ids:
                logger.info("no recent ranked games, scoring on rank only")
                return self._tier_only(identity, account, rank)

            records = await self._fetch_matches(match_ids, progress)

            aggregate = MatchAggregate.from_matches(account.puuid, records)
            notify(progress, f"Computed statistics over {aggregate.games} games")
            if aggregate.games == 0:
                logger.warning(f"none of {len(match_ids)} matches could be analyzed, scoring on rank only")
                return self._tier_only(identity, account, rank)

            stats = self._build(identity, account, rank, aggregate)
            logger.debug(lambda: f"scored {stats.team_contribution} {stats.score.to_dict()}")
            return stats

    async def analyze_many(
        self,
        identities: Sequence[Identity],
        progress: Optional[ProgressSink] = None,
    ) -> List[PlayerStats]:
        """Analyze concurrently; results come back in input order."""
        return list(await asyncio.gather(*(self.analyze(i, progress) for i in identities)))

    async def _fetch_matches(self, match_ids: List[str], progress: Optional[ProgressSink]) -> List[MatchRecord]:
        total = len(match_ids)
        completed = 0

        async def _one(match_id: str) -> Optional[MatchRecord]:
            nonlocal completed
            record = await self.matches.get_match(match_id)
            completed += 1
            notify(progress, f"Analyzing match data... ({completed}/{total})")
            return record

        results = await asyncio.gather(*(_one(m) for m in match_ids), return_exceptions=True)

        records: List[MatchRecord] = []
        for match_id, res in zip(match_ids, results):
            if isinstance(res, Exception):
                logger.error(f"match {match_id} skipped: {res}")
                continue
            if res is not None:
                records.append(res)
        return records

    @staticmethod
    def _tier_only(identity: Identity, account: AccountRef, rank: Optional[RankEntry]) -> PlayerStats:
        breakdown = scoring.score_tier_only(rank)
        return PlayerStats(
            identity=identity,
            puuid=account.puuid,
            rank=rank,
            team_contribution=round(breakdown.total, 2),
            score=breakdown,
        )

    @staticmethod
    def _build(
        identity: Identity,
        account: AccountRef,
        rank: Optional[RankEntry],
        aggregate: MatchAggregate,
    ) -> PlayerStats:
        preferred_lane = aggregate.preferred_lane
        breakdown = scoring.score_player(
            rank,
            kda=aggregate.kda,
            win_rate=aggregate.win_rate,
            preferred_lane=preferred_lane,
            cs_per_minute=aggregate.cs_per_minute,
            vision_per_minute=aggregate.vision_per_minute,
        )
        return PlayerStats(
            identity=identity,
            puuid=account.puuid,
            rank=rank,
            avg_kills=round(aggregate.avg_kills, 2),
            avg_deaths=round(aggregate.avg_deaths, 2),
            avg_assists=round(aggregate.avg_assists, 2),
            avg_cs_per_minute=round(aggregate.cs_per_minute, 1),
            avg_vision_per_minute=round(aggregate.vision_per_minute, 2),
            kda=round(aggregate.kda, 2),
            win_rate=round(aggregate.win_rate, 2),
            lane_distribution=dict(aggregate.lanes),
            preferred_lane=preferred_lane,
            total_games=aggregate.games,
            team_contribution=round(breakdown.total, 2),
            score=breakdown,
        )
