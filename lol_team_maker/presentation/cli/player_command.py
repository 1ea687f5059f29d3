from __future__ import annotations

import json
from typing import List, Optional

from ...application.services import PlayerAnalyzer
from ...config import settings
from ...core.logging import get_logger
from ...domain.entities import Identity, PlayerStats
from ...domain.enums import Region, Role
from ...infrastructure import AccountRepository, MatchRepository, RiotAPIClient


def print_json(payload) -> None:
    print(json.dumps(payload, separators=(",", ":"), ensure_ascii=False))


class PlayerCommand:
    """Analyze a single player and print the score breakdown."""

    def __init__(self, region: Optional[Region] = None, *, json_out: bool = False) -> None:
        self.region = region or Region.from_string(settings.REGION)
        self.json_out = json_out
        self._log = get_logger(__name__, service="player-cli")

    @staticmethod
    def _print_stats(stats: PlayerStats) -> None:
        print("\n" + "=" * 57)
        print(stats.name)
        print("=" * 57)
        if not stats.resolved:
            print("Account not found.")
            return
        print(f"Rank: {stats.rank.display if stats.rank else 'UNRANKED'}")
        print(f"Games analyzed: {stats.total_games}")
        print(f"K/D/A: {stats.avg_kills}/{stats.avg_deaths}/{stats.avg_assists}  (KDA {stats.kda})")
        print(f"Win rate: {stats.win_rate}%")
        print(f"CS/min: {stats.avg_cs_per_minute}  Vision/min: {stats.avg_vision_per_minute}")
        lanes = ", ".join(
            f"{role.short_name} {stats.lane_count(role)}" for role in Role if stats.lane_count(role)
        )
        preferred = stats.preferred_lane.short_name if stats.preferred_lane else "-"
        print(f"Lanes: {lanes or '-'}  (preferred {preferred})")
        print("-" * 57)
        for term, value in stats.score.to_dict().items():
            print(f"  {term:<18} {value:>9.2f}")
        print(f"  {'team_contribution':<18} {stats.team_contribution:>9.2f}")
        print("=" * 57)

    async def run(self, riot_id: str) -> PlayerStats:
        settings.validate()
        identity = Identity.parse(riot_id)
        self._log.info(f"start player={identity}")

        async with RiotAPIClient(settings.RIOT_API_KEY, self.region) as api:
            analyzer = PlayerAnalyzer(AccountRepository(api), MatchRepository(api))
            stats = await analyzer.analyze(identity)

        if self.json_out:
            print_json(stats.to_dict())
        else:
            self._print_stats(stats)
        return stats


class PlayersCommand:
    """Analyze several players without drafting teams; lists who was found and who was not."""

    def __init__(self, region: Optional[Region] = None, *, json_out: bool = False) -> None:
        self.region = region or Region.from_string(settings.REGION)
        self.json_out = json_out
        self._log = get_logger(__name__, service="players-cli")

    @staticmethod
    def split(results: List[PlayerStats]) -> tuple[List[PlayerStats], List[PlayerStats]]:
        """(successful, failed), each in input order."""
        return [p for p in results if p.resolved], [p for p in results if not p.resolved]

    @staticmethod
    def to_payload(results: List[PlayerStats]) -> dict:
        successful, failed = PlayersCommand.split(results)
        return {
            'successful': [p.to_dict() for p in successful],
            'failed': [str(p.identity) for p in failed],
            'total_requested': len(results),
            'total_successful': len(successful),
            'total_failed': len(failed),
        }

    def _print_results(self, results: List[PlayerStats]) -> None:
        successful, failed = self.split(results)
        print("\n" + "=" * 70)
        print(f"  {'player':<28} {'rank':<20} {'lane':<5} {'score':>9}")
        print("-" * 70)
        ranked = sorted(successful, key=lambda p: p.team_contribution, reverse=True)
        for player in ranked:
            rank = player.rank.display if player.rank else "UNRANKED"
            lane = player.preferred_lane.short_name if player.preferred_lane else "-"
            print(f"  {player.name:<28} {rank:<20} {lane:<5} {player.team_contribution:>9.2f}")
        print("=" * 70)
        print(f"Found {len(successful)}/{len(results)}")
        if failed:
            print(f"Not found: {', '.join(p.name for p in failed)}")

    async def run(self, riot_ids: List[str]) -> List[PlayerStats]:
        settings.validate()
        identities = [Identity.parse(r) for r in riot_ids]
        if not identities:
            raise ValueError("at least one NAME#TAG is required")
        self._log.info(f"start players={len(identities)} region={self.region.code}")

        async with RiotAPIClient(settings.RIOT_API_KEY, self.region) as api:
            analyzer = PlayerAnalyzer(AccountRepository(api), MatchRepository(api))
            results = await analyzer.analyze_many(identities)

        if self.json_out:
            print_json(self.to_payload(results))
        else:
            self._print_results(results)
        self._log.success(f"done found={sum(1 for p in results if p.resolved)}/{len(results)}")
        return results
