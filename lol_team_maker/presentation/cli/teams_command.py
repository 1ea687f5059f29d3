from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional

from ...application.use_cases import AnalyzeAndBalanceUseCase, BalanceResult
from ...application.services import CallbackSink
from ...config import settings
from ...core.logging import get_logger
from ...domain.entities import Identity, Team
from ...domain.enums import Region, Role
from ...domain.interfaces import ProgressEvent
from ...infrastructure import RiotAPIClient
from .player_command import print_json


def read_riot_ids(path: Path) -> List[str]:
    """One ``Name#TAG`` per line; blank lines are ignored."""
    with open(path, encoding="utf-8") as fh:
        return [line.strip() for line in fh if line.strip()]


def parse_identities(riot_ids: Iterable[str]) -> List[Identity]:
    return [Identity.parse(r) for r in riot_ids]


class TeamsCommand:
    """Analyze a lobby and print balanced teams with a progress bar."""

    def __init__(self, region: Optional[Region] = None, *, json_out: bool = False) -> None:
        self.region = region or Region.from_string(settings.REGION)
        self.json_out = json_out
        self._log = get_logger(__name__, service="teams-cli")

    def _print_banner(self, count: int) -> None:
        print("""
╔═════════════════════════════════════════╗
║                                         ║
║    LOL TEAM MAKER - {count} PLAYERS ON {region}
║                                         ║
╚═════════════════════════════════════════╝
        """.format(count=count, region=self.region.code.upper()))

    def _make_progress_cb(self):
        width = 30
        last = {"percent": 0}

        def _progress(event: ProgressEvent) -> None:
            if event.percent is not None:
                last["percent"] = max(0, min(100, event.percent))
            filled = int(width * last["percent"] / 100)
            bar = "█" * filled + "-" * (width - filled)
            message = event.message[:48].ljust(48)
            print(f"\r|{bar}| {last['percent']:3d}% {message}", end="", flush=True)
        return _progress

    @staticmethod
    def _print_team(team: Team) -> None:
        print("\n" + "=" * 57)
        print(f"TEAM {team.team_number}  (avg {team.avg_score:.2f})")
        print("=" * 57)
        for role in Role:
            player = team.player_for(role)
            if player is None:
                continue
            rank = player.rank.display if player.rank else "UNRANKED"
            marker = "" if player.resolved else "  [not found]"
            print(f"  {role.short_name:<4} {player.name:<28} {rank:<20} {player.team_contribution:>8.2f}{marker}")

    def _print_result(self, result: BalanceResult) -> None:
        print("")
        for team in result.teams:
            self._print_team(team)
        print("\n" + "=" * 57)
        print(f"Balance: {result.balance:.2f} ({result.label})")
        if result.failed:
            print(f"Not found: {', '.join(str(i) for i in result.failed)}")
        print("=" * 57)

    async def run(self, riot_ids: List[str], *, timeout: Optional[float] = None) -> BalanceResult:
        settings.validate()
        identities = parse_identities(riot_ids)
        self._log.info(f"start players={len(identities)} region={self.region.code}")

        sink = None
        if not self.json_out:
            self._print_banner(len(identities))
            sink = CallbackSink(self._make_progress_cb())
        async with RiotAPIClient(settings.RIOT_API_KEY, self.region) as api:
            use_case = AnalyzeAndBalanceUseCase.from_client(api, timeout=timeout)
            result = await use_case.execute(identities, sink)

        if self.json_out:
            print_json(result.to_dict())
        else:
            self._print_result(result)
        self._log.success(f"done balance={result.balance}")
        return result
