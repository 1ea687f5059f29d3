"""Tests for the snake draft and lane assignment."""
import pytest

from lol_team_maker.application.services.team_balancer import (
    TeamBalancer,
    balance_label,
    snake_order,
    validate_player_count,
)
from lol_team_maker.domain.entities import Identity, PlayerStats
from lol_team_maker.domain.enums import Role
from lol_team_maker.domain.errors import InvalidInput

from .conftest import make_player


@pytest.fixture
def balancer():
    return TeamBalancer()


class TestValidation:
    @pytest.mark.parametrize("count", [0, 5, 9, 11, 14, 21])
    def test_rejects_invalid_counts(self, balancer, count):
        players = [make_player(f"p{i}", 1000) for i in range(count)]
        with pytest.raises(InvalidInput):
            balancer.divide(players)

    @pytest.mark.parametrize("count", [10, 15, 20, 25])
    def test_accepts_multiples_of_five(self, balancer, count):
        players = [make_player(f"p{i}", 1000 + i) for i in range(count)]
        teams = balancer.divide(players)
        assert len(teams) == count // 5
        assert all(len(t.members) == 5 for t in teams)
        drafted = [p for t in teams for p in t.members]
        assert sorted(id(p) for p in drafted) == sorted(id(p) for p in players)

    def test_validate_player_count_helper(self):
        validate_player_count(10)
        with pytest.raises(InvalidInput):
            validate_player_count(12)


class TestSnakeDraft:
    def test_snake_order(self):
        assert snake_order(2) == [0, 1, 1, 0]
        assert snake_order(3) == [0, 1, 2, 2, 1, 0]

    def test_ten_players_rank_sums(self, balancer):
        # Scores 10..1: team 1 gets ranks 1,4,5,8,9 and team 2 gets 2,3,6,7,10
        players = [make_player(f"p{i}", float(10 - i)) for i in range(10)]
        teams = balancer.divide(players)
        assert [p.team_contribution for p in teams[0].members] == [10, 7, 6, 3, 2]
        assert [p.team_contribution for p in teams[1].members] == [9, 8, 5, 4, 1]
        assert teams[0].avg_score == 5.6
        assert teams[1].avg_score == 5.4

    def test_input_order_does_not_matter_for_distinct_scores(self, balancer):
        players = [make_player(f"p{i}", float(i * 37 % 101)) for i in range(15)]
        forward = balancer.divide(players)
        backward = balancer.divide(list(reversed(players)))
        assert [[p.name for p in t.members] for t in forward] == [[p.name for p in t.members] for t in backward]

    def test_ties_keep_input_order(self, balancer):
        players = [make_player(f"p{i}", 1000) for i in range(10)]
        teams = balancer.divide(players)
        assert [p.name for p in teams[0].members] == ["p0#T1", "p3#T1", "p4#T1", "p7#T1", "p8#T1"]
        assert [p.name for p in teams[1].members] == ["p1#T1", "p2#T1", "p5#T1", "p6#T1", "p9#T1"]

    def test_team_numbers_are_one_based(self, balancer):
        teams = balancer.divide([make_player(f"p{i}", i) for i in range(15)])
        assert [t.team_number for t in teams] == [1, 2, 3]

    def test_placeholders_are_distinct_players(self, balancer):
        players = [make_player(f"p{i}", 1500) for i in range(8)]
        players += [PlayerStats.unresolved(Identity("ghost", "NA1")) for _ in range(2)]
        teams = balancer.divide(players)
        drafted = [p for t in teams for p in t.members]
        assert sum(1 for p in drafted if not p.resolved) == 2
        # Zero-score placeholders are picked last: one per team
        assert [sum(1 for p in t.members if not p.resolved) for t in teams] == [1, 1]


class TestLaneAssignment:
    def test_each_player_gets_their_main(self):
        members = [
            make_player("top", 1, {Role.TOP: 10}),
            make_player("jg", 1, {Role.JUNGLE: 8}),
            make_player("mid", 1, {Role.MIDDLE: 12}),
            make_player("adc", 1, {Role.BOTTOM: 9}),
            make_player("sup", 1, {Role.UTILITY: 7}),
        ]
        lanes = TeamBalancer.assign_lanes(list(reversed(members)))
        assert {role: p.identity.game_name for role, p in lanes.items()} == {
            Role.TOP: "top", Role.JUNGLE: "jg", Role.MIDDLE: "mid",
            Role.BOTTOM: "adc", Role.UTILITY: "sup",
        }

    def test_conflict_resolved_in_lane_order(self):
        a = make_player("a", 1, {Role.MIDDLE: 10, Role.TOP: 3})
        b = make_player("b", 1, {Role.MIDDLE: 5, Role.TOP: 9})
        c = make_player("c", 1)
        d = make_player("d", 1)
        e = make_player("e", 1)
        lanes = TeamBalancer.assign_lanes([a, b, c, d, e])
        # TOP is claimed first by b; a then wins MIDDLE
        assert lanes[Role.TOP] is b
        assert lanes[Role.MIDDLE] is a
        # Remaining lanes filled in member order
        assert lanes[Role.JUNGLE] is c
        assert lanes[Role.BOTTOM] is d
        assert lanes[Role.UTILITY] is e

    def test_lane_with_no_players_is_filled_from_leftovers(self):
        members = [make_player(f"m{i}", 1, {Role.MIDDLE: i + 1}) for i in range(5)]
        lanes = TeamBalancer.assign_lanes(members)
        assert lanes[Role.MIDDLE] is members[4]
        assert [lanes[r] for r in (Role.TOP, Role.JUNGLE, Role.BOTTOM, Role.UTILITY)] == members[:4]

    def test_every_member_assigned_once(self):
        members = [make_player(f"m{i}", 1, {Role.TOP: 5}) for i in range(5)]
        lanes = TeamBalancer.assign_lanes(members)
        assert len(lanes) == 5
        assert len({id(p) for p in lanes.values()}) == 5

    def test_rerun_on_assigned_team_keeps_lanes(self):
        members = [
            make_player("a", 1, {Role.TOP: 2, Role.UTILITY: 4}),
            make_player("b", 1, {Role.UTILITY: 4}),
            make_player("c", 1, {Role.BOTTOM: 1}),
            make_player("d", 1),
            make_player("e", 1, {Role.JUNGLE: 3, Role.TOP: 3}),
        ]
        first = TeamBalancer.assign_lanes(members)
        by_lane = [first[role] for role in Role]
        assert TeamBalancer.assign_lanes(by_lane) == first
        assert TeamBalancer.assign_lanes(list(reversed(by_lane))) == first

    def test_rerun_on_drafted_teams_keeps_lanes(self, balancer):
        lanes = [Role.UTILITY, Role.TOP, Role.MIDDLE, Role.UTILITY, Role.JUNGLE]
        players = [
            make_player(f"p{i}", 1000 + (i % 3) * 50, {lanes[i % 5]: 4, lanes[(i + 2) % 5]: 4})
            for i in range(10)
        ]
        for team in balancer.divide(players):
            assert TeamBalancer.assign_lanes(team.members) == dict(team.lane_assignment)
            by_lane = [team.lane_assignment[role] for role in Role]
            assert TeamBalancer.assign_lanes(by_lane) == dict(team.lane_assignment)

    def test_lane_assignment_is_read_only(self, balancer):
        team = balancer.divide([make_player(f"p{i}", i) for i in range(10)])[0]
        with pytest.raises(TypeError):
            team.lane_assignment[Role.TOP] = team.members[0]


class TestBalanceMetric:
    def test_population_stddev(self, balancer):
        players = [make_player(f"p{i}", float(10 - i)) for i in range(10)]
        teams = balancer.divide(players)
        # Averages 5.6 and 5.4
        assert balancer.balance(teams) == pytest.approx(0.1)

    def test_identical_teams_are_perfect(self, balancer):
        teams = balancer.divide([make_player(f"p{i}", 1200) for i in range(10)])
        assert balancer.balance(teams) == 0

    @pytest.mark.parametrize("value,label", [
        (0, "excellent"), (4.99, "excellent"), (5, "good"), (9.99, "good"), (10, "fair"), (250, "fair"),
    ])
    def test_labels(self, value, label):
        assert balance_label(value) == label
