"""Use case: analyze a lobby of players and split it into balanced teams."""
from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ...config import settings
from ...core.logging import get_logger
from ...domain.entities import Identity, MatchRecord, PlayerStats, Team
from ...domain.errors import BatchTimeout, InsufficientResults
from ...domain.interfaces import ProgressSink, RiotDataSource
from ...infrastructure import AccountRepository, MatchRepository, ResultCache
from ..services.player_analyzer import PlayerAnalyzer
from ..services.progress import PrefixedSink, notify
from ..services.team_balancer import TeamBalancer, balance_label, validate_player_count

logger = get_logger(__name__, service="use-case")

# Analysis covers 0-90%, balancing the rest
_ANALYSIS_SHARE = 90


@dataclass
class BalanceResult:
    teams: List[Team]
    balance: float
    label: str
    players: List[PlayerStats] = field(default_factory=list)

    @property
    def failed(self) -> List[Identity]:
        """Identities that entered the draft as zero-score placeholders."""
        return [p.identity for p in self.players if not p.resolved]

    def to_dict(self) -> dict:
        return {
            'teams': [t.to_dict() for t in self.teams],
            'balance': self.balance,
            'label': self.label,
            'failed': [str(i) for i in self.failed],
        }


class AnalyzeAndBalanceUseCase:
    """
    Caller-facing batch operation.

    Size rules are checked before any request is made. Each identity is
    analyzed concurrently; identities that cannot be resolved stay in the
    draft as zero-score placeholders so the team count is unchanged, but
    the batch fails with :class:`InsufficientResults` when fewer than
    ``min_resolved_players`` real analyses succeeded.
    """

    def __init__(
        self,
        analyzer: PlayerAnalyzer,
        balancer: Optional[TeamBalancer] = None,
        *,
        min_resolved_players: Optional[int] = None,
        timeout: Optional[float] = None,
    ):
        self.analyzer = analyzer
        self.balancer = balancer or TeamBalancer(settings.TEAM_SIZE, settings.MIN_PLAYERS)
        self.min_resolved_players = (
            settings.MIN_RESOLVED_PLAYERS if min_resolved_players is None else min_resolved_players
        )
        timeout = timeout if timeout is not None else settings.BATCH_TIMEOUT
        # 0 or less disables the batch timeout
        self.timeout = timeout if timeout and timeout > 0 else None

    @classmethod
    def from_client(
        cls,
        api_client: RiotDataSource,
        *,
        match_cache: Optional[ResultCache[str, MatchRecord]] = None,
        **kwargs,
    ) -> 'AnalyzeAndBalanceUseCase':
        """
        Wire repositories and services around one data source.

        The account cache is scoped to this use case. Pass ``match_cache``
        to share match records across batches.
        """
        analyzer = PlayerAnalyzer(
            AccountRepository(api_client),
            MatchRepository(api_client, match_cache),
        )
        return cls(analyzer, **kwargs)

    async def execute(
        self,
        identities: Sequence[Identity],
        progress: Optional[ProgressSink] = None,
    ) -> BalanceResult:
        validate_player_count(len(identities), self.balancer.team_size, self.balancer.min_players)

        notify(progress, "Starting player analysis...", 0)
        players = await self._analyze_all(identities, progress)

        resolved = sum(1 for p in players if p.resolved)
        if resolved < self.min_resolved_players:
            logger.error(f"only {resolved}/{len(players)} players resolved")
            raise InsufficientResults(resolved, self.min_resolved_players)

        notify(progress, "Balancing teams...", 95)
        teams = self.balancer.divide(players)
        balance = round(self.balancer.balance(teams), 2)
        label = balance_label(balance)

        logger.success(f"teams ready: {len(teams)} teams, balance={balance} ({label})")
        notify(progress, f"Teams ready ({label} balance)", 100)
        return BalanceResult(teams=teams, balance=balance, label=label, players=players)

    async def _analyze_all(
        self,
        identities: Sequence[Identity],
        progress: Optional[ProgressSink],
    ) -> List[PlayerStats]:
        total = len(identities)
        completed = 0

        async def _one(identity: Identity) -> PlayerStats:
            nonlocal completed
            sink = PrefixedSink(progress, identity.game_name) if progress is not None else None
            try:
                stats = await self.analyzer.analyze(identity, sink)
            except Exception:
                logger.exception(f"unexpected failure analyzing {identity}")
                stats = PlayerStats.unresolved(identity)
            completed += 1
            percent = completed * _ANALYSIS_SHARE // total
            if stats.resolved:
                notify(progress, f"{identity.game_name} analyzed ({completed}/{total})", percent)
            else:
                notify(progress, f"analysis failed for {identity.game_name} ({completed}/{total})", percent)
            return stats

        batch = asyncio.gather(*(_one(i) for i in identities))
        if self.timeout is None:
            return list(await batch)
        try:
            return list(await asyncio.wait_for(batch, timeout=self.timeout))
        except asyncio.TimeoutError:
            logger.error(f"batch abandoned after {self.timeout:g}s")
            raise BatchTimeout(self.timeout) from None
