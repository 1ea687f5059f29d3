"""Tests for per-player analysis against the in-memory data source."""
import pytest

from lol_team_maker.application.services import CallbackSink, PlayerAnalyzer
from lol_team_maker.application.services.player_analyzer import MatchAggregate
from lol_team_maker.domain.entities import Identity, MatchRecord, ParticipantRow
from lol_team_maker.domain.enums import Role, Tier
from lol_team_maker.infrastructure import AccountRepository, MatchRepository

from .conftest import league_entry, match_payload, participant


def _analyzer(source, matches_per_player=20):
    return PlayerAnalyzer(
        AccountRepository(source),
        MatchRepository(source),
        matches_per_player=matches_per_player,
    )


def _seed_player(source, riot_id="Faker#KR1", puuid="faker"):
    """Two 30-minute games: a mid win and a mid loss."""
    source.add_player(riot_id, puuid,
                      entries=[league_entry("GOLD", "II", 40, wins=60, losses=40)],
                      match_ids=["KR_1", "KR_2"])
    source.add_match(match_payload("KR_1", [
        participant(puuid, kills=6, deaths=2, assists=6, cs=200, jungle_cs=10, vision=30, win=True),
        participant("other", kills=1, deaths=9, assists=0, position="TOP"),
    ]))
    source.add_match(match_payload("KR_2", [
        participant(puuid, kills=2, deaths=4, assists=4, cs=180, vision=24, win=False),
    ]))


class TestMatchAggregate:
    def test_averages_and_rates(self):
        match = MatchRecord("M1", 600, (ParticipantRow("p", 4, 0, 6, 50, 10, 20, Role.JUNGLE, None, True),))
        aggregate = MatchAggregate.from_matches("p", [match])
        assert aggregate.games == 1
        assert aggregate.kda == 10
        assert aggregate.win_rate == 100
        assert aggregate.cs_per_minute == pytest.approx(6.0)
        assert aggregate.vision_per_minute == pytest.approx(2.0)
        assert aggregate.preferred_lane is Role.JUNGLE

    def test_zero_duration_games_skip_rates(self):
        rows = (ParticipantRow("p", 1, 1, 1, 100, 0, 10, Role.TOP, None, False),)
        aggregate = MatchAggregate.from_matches("p", [
            MatchRecord("M1", 0, rows),
            MatchRecord("M2", 600, rows),
        ])
        assert aggregate.games == 2
        assert aggregate.cs_per_minute == pytest.approx(10.0)

    def test_player_absent_from_match(self):
        aggregate = MatchAggregate.from_matches("p", [MatchRecord("M1", 600, ())])
        assert aggregate.games == 0
        assert aggregate.preferred_lane is None

    def test_preferred_lane_tie_goes_to_earlier_lane(self):
        aggregate = MatchAggregate()
        aggregate.lanes[Role.UTILITY] = 3
        aggregate.lanes[Role.JUNGLE] = 3
        assert aggregate.preferred_lane is Role.JUNGLE


class TestPlayerAnalyzer:
    @pytest.mark.asyncio
    async def test_full_analysis(self, source):
        _seed_player(source)
        stats = await _analyzer(source).analyze(Identity("Faker", "KR1"))

        assert stats.resolved
        assert stats.puuid == "faker"
        assert stats.rank.tier is Tier.GOLD
        assert stats.total_games == 2
        assert stats.avg_kills == 4.0
        assert stats.avg_deaths == 3.0
        assert stats.avg_assists == 5.0
        assert stats.kda == 3.0
        assert stats.win_rate == 50.0
        # (210 / 30 + 180 / 30) / 2
        assert stats.avg_cs_per_minute == 6.5
        assert stats.preferred_lane is Role.MIDDLE
        assert stats.lane_distribution[Role.MIDDLE] == 2
        assert stats.lane_distribution[Role.TOP] == 0
        # 1440 tier + 0 kda + 0 win rate + 30 activity + 0 cs
        assert stats.team_contribution == 1470.0

    @pytest.mark.asyncio
    async def test_unknown_account_gives_placeholder(self, source):
        events = []
        stats = await _analyzer(source).analyze(Identity("Nobody", "404"), CallbackSink(events.append))

        assert not stats.resolved
        assert stats.team_contribution == 0
        assert stats.total_games == 0
        assert any("account not found" in e.message for e in events)
        assert source.calls["league"] == 0

    @pytest.mark.asyncio
    async def test_no_matches_scores_tier_only(self, source):
        source.add_player("Rookie#NA1", "rookie", entries=[league_entry("DIAMOND", "IV", 10, 100, 100)])
        stats = await _analyzer(source).analyze(Identity("Rookie", "NA1"))

        assert stats.resolved
        assert stats.total_games == 0
        assert stats.preferred_lane is None
        assert stats.team_contribution == 2410
        assert source.calls["match"] == 0

    @pytest.mark.asyncio
    async def test_unranked_player(self, source):
        source.add_player("New#EUW", "new")
        stats = await _analyzer(source).analyze(Identity("New", "EUW"))
        assert stats.rank is None
        assert stats.team_contribution == 1200

    @pytest.mark.asyncio
    async def test_failed_matches_are_omitted(self, source):
        _seed_player(source)
        source.failing_matches.add("KR_2")
        stats = await _analyzer(source).analyze(Identity("Faker", "KR1"))

        assert stats.total_games == 1
        assert stats.win_rate == 100.0
        assert stats.avg_kills == 6.0

    @pytest.mark.asyncio
    async def test_all_matches_failing_falls_back_to_tier(self, source):
        _seed_player(source)
        source.failing_matches.update({"KR_1", "KR_2"})
        stats = await _analyzer(source).analyze(Identity("Faker", "KR1"))

        assert stats.resolved
        assert stats.total_games == 0
        assert stats.team_contribution == 1440

    @pytest.mark.asyncio
    async def test_progress_events(self, source):
        _seed_player(source)
        events = []
        await _analyzer(source).analyze(Identity("Faker", "KR1"), CallbackSink(events.append))

        messages = [e.message for e in events]
        assert messages[0] == "Fetched match history (2 games)"
        assert "Analyzing match data... (2/2)" in messages
        assert messages[-1] == "Computed statistics over 2 games"

    @pytest.mark.asyncio
    async def test_broken_sink_does_not_interrupt(self, source):
        _seed_player(source)

        def explode(event):
            raise RuntimeError("sink down")

        stats = await _analyzer(source).analyze(Identity("Faker", "KR1"), CallbackSink(explode))
        assert stats.total_games == 2

    @pytest.mark.asyncio
    async def test_shared_matches_fetched_once(self, source):
        _seed_player(source, "Faker#KR1", "faker")
        source.add_player("Other#KR1", "other", match_ids=["KR_1"])
        analyzer = _analyzer(source)

        results = await analyzer.analyze_many([Identity("Faker", "KR1"), Identity("Other", "KR1")])

        assert [r.puuid for r in results] == ["faker", "other"]
        assert source.match_calls["KR_1"] == 1
        assert results[1].preferred_lane is Role.TOP

    @pytest.mark.asyncio
    async def test_duplicate_identity_resolved_once(self, source):
        _seed_player(source)
        analyzer = _analyzer(source)
        await analyzer.analyze_many([Identity("Faker", "KR1")] * 3)
        assert source.calls["account"] == 1
