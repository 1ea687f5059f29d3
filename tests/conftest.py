"""Shared fixtures: a fake timeline and an in-memory Riot data source."""
import asyncio
from typing import Any, Dict, List, Optional

import pytest

from lol_team_maker.domain.entities import PlayerStats, Identity
from lol_team_maker.domain.enums import QueueType, Role
from lol_team_maker.domain.errors import UpstreamRejected
from lol_team_maker.domain.interfaces import RiotDataSource


class FakeClock:
    """Monotonic clock that only moves when something sleeps on it."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.now += max(0.0, seconds)
        await asyncio.sleep(0)


def participant(puuid: str, *, kills=0, deaths=0, assists=0, cs=0, jungle_cs=0,
                vision=0, position: Optional[str] = "MIDDLE", win=False) -> Dict[str, Any]:
    return {
        "puuid": puuid,
        "kills": kills,
        "deaths": deaths,
        "assists": assists,
        "totalMinionsKilled": cs,
        "neutralMinionsKilled": jungle_cs,
        "visionScore": vision,
        "individualPosition": position,
        "teamPosition": position,
        "win": win,
    }


def match_payload(match_id: str, participants: List[Dict[str, Any]], *, duration: int = 1800) -> Dict[str, Any]:
    return {
        "metadata": {"matchId": match_id, "participants": [p["puuid"] for p in participants]},
        "info": {
            "gameDuration": duration,
            "gameCreation": 1_700_000_000_000,
            "queueId": 420,
            "participants": participants,
        },
    }


def league_entry(tier: str, rank: str = "I", lp: int = 0, wins: int = 0, losses: int = 0,
                 queue: str = "RANKED_SOLO_5x5") -> Dict[str, Any]:
    return {
        "queueType": queue,
        "tier": tier,
        "rank": rank,
        "leaguePoints": lp,
        "wins": wins,
        "losses": losses,
    }


class FakeDataSource(RiotDataSource):
    """In-memory upstream. Unknown Riot IDs answer 404 like the real API."""

    def __init__(self):
        self.accounts: Dict[tuple, str] = {}
        self.leagues: Dict[str, List[Dict[str, Any]]] = {}
        self.match_ids: Dict[str, List[str]] = {}
        self.matches: Dict[str, Dict[str, Any]] = {}
        self.failing_matches: set = set()
        self.calls: Dict[str, int] = {"account": 0, "league": 0, "match_ids": 0, "match": 0}
        self.match_calls: Dict[str, int] = {}

    def add_player(self, riot_id: str, puuid: str, *, entries=None, match_ids=None) -> None:
        identity = Identity.parse(riot_id)
        self.accounts[(identity.game_name, identity.tag_line)] = puuid
        self.leagues[puuid] = list(entries or [])
        self.match_ids[puuid] = list(match_ids or [])

    def add_match(self, payload: Dict[str, Any]) -> None:
        self.matches[payload["metadata"]["matchId"]] = payload

    async def get_account_by_riot_id(self, game_name, tag_line):
        self.calls["account"] += 1
        await asyncio.sleep(0)
        puuid = self.accounts.get((game_name, tag_line))
        if puuid is None:
            raise UpstreamRejected("HTTP 404", status_code=404)
        return {"puuid": puuid, "gameName": game_name, "tagLine": tag_line}

    async def get_league_entries_by_puuid(self, puuid):
        self.calls["league"] += 1
        await asyncio.sleep(0)
        return list(self.leagues.get(puuid, []))

    async def get_match_ids_by_puuid(self, puuid, count=20, queue: Optional[QueueType] = None):
        self.calls["match_ids"] += 1
        await asyncio.sleep(0)
        return list(self.match_ids.get(puuid, []))[:count]

    async def get_match_by_id(self, match_id):
        self.calls["match"] += 1
        self.match_calls[match_id] = self.match_calls.get(match_id, 0) + 1
        await asyncio.sleep(0)
        if match_id in self.failing_matches or match_id not in self.matches:
            raise UpstreamRejected("HTTP 500", status_code=500)
        return self.matches[match_id]


def make_player(name: str, score: float, lanes: Optional[Dict[Role, int]] = None) -> PlayerStats:
    distribution = {role: 0 for role in Role}
    distribution.update(lanes or {})
    return PlayerStats(
        identity=Identity(name, "T1"),
        puuid=f"puuid-{name}",
        team_contribution=score,
        lane_distribution=distribution,
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def source():
    return FakeDataSource()
