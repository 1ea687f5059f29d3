"""Main CLI entry-point."""
from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import List, Optional

from .config import settings
from .core.logging import bootstrap_logging, get_logger, shutdown_logging
from .domain.enums import Region
from .domain.errors import TeamMakerError

_RED = "\033[91m"
_RESET = "\033[0m"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lol-team-maker",
        description="Split a League of Legends lobby into balanced teams.",
    )
    parser.add_argument("--region", default=settings.REGION, help="platform code, e.g. kr or euw1")
    parser.add_argument("--verbose", action="store_true", help="log to the console as well")
    sub = parser.add_subparsers(dest="command", required=True)

    teams = sub.add_parser("teams", help="analyze players and build balanced teams")
    teams.add_argument("riot_ids", nargs="*", metavar="NAME#TAG")
    teams.add_argument("--file", type=Path, help="file with one NAME#TAG per line")
    teams.add_argument("--timeout", type=float, default=None, help="abandon the batch after this many seconds")

    players = sub.add_parser("players", help="analyze several players without building teams")
    players.add_argument("riot_ids", nargs="*", metavar="NAME#TAG")
    players.add_argument("--file", type=Path, help="file with one NAME#TAG per line")

    player = sub.add_parser("player", help="analyze a single player")
    player.add_argument("riot_id", metavar="NAME#TAG")

    for command in (teams, players, player):
        command.add_argument("--json", action="store_true", help="print the result as JSON")
    return parser


async def _dispatch(args: argparse.Namespace) -> None:
    from .presentation.cli import PlayerCommand, PlayersCommand, TeamsCommand, read_riot_ids

    region = Region.from_string(args.region)
    if args.command == "player":
        await PlayerCommand(region, json_out=args.json).run(args.riot_id)
        return

    riot_ids = list(args.riot_ids)
    if args.file:
        riot_ids.extend(read_riot_ids(args.file))
    if args.command == "teams":
        await TeamsCommand(region, json_out=args.json).run(riot_ids, timeout=args.timeout)
    elif args.command == "players":
        await PlayersCommand(region, json_out=args.json).run(riot_ids)


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(sys.argv[1:] if argv is None else argv)
    bootstrap_logging(
        level=settings.LOG_LEVEL,
        console=True if args.verbose else None,
        log_dir=settings.LOG_DIR,
    )
    log = get_logger(__name__, service="cli")
    try:
        asyncio.run(_dispatch(args))
        return 0
    except (TeamMakerError, ValueError, OSError) as e:
        log.error(f"{type(e).__name__}: {e}")
        print(f"\n{_RED}Error:{_RESET} {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130
    finally:
        shutdown_logging()


if __name__ == "__main__":
    raise SystemExit(main())
