"""Team contribution score.

    team_contribution = tier_score + kda_bonus + win_rate_bonus
                        + activity_bonus + role_stats_bonus

Every function here is pure; the constants are part of the scoring contract
and changing any of them shifts how teams are drafted.
"""
import math
from typing import Optional

from ...domain.entities import RankEntry, ScoreBreakdown
from ...domain.enums import Division, Role, Tier

UNRANKED_TIER_SCORE = 1200  # Gold IV baseline, not a penalty

KDA_CENTER = 3.0
KDA_MULTIPLIER = 30
KDA_CAP = 150

WIN_RATE_CENTER = 50.0
WIN_RATE_MULTIPLIER = 5

ACTIVITY_MULTIPLIER = 15
ACTIVITY_CAP = 50

CS_PER_MINUTE_CENTER = 6.5
CS_PER_MINUTE_MULTIPLIER = 10
VISION_PER_MINUTE_CENTER = 2.0
VISION_PER_MINUTE_MULTIPLIER = 20


def tier_score(tier: Optional[Tier], division: Optional[Division] = None, league_points: int = 0) -> float:
    """Position on the rank ladder. Apex tiers share a base and are split by LP only."""
    if tier is None:
        return float(UNRANKED_TIER_SCORE)
    if tier.is_apex:
        return float(tier.base_score + league_points)
    offset = division.offset if division is not None else 0
    return float(tier.base_score + offset + league_points)


def rank_score(rank: Optional[RankEntry]) -> float:
    if rank is None:
        return float(UNRANKED_TIER_SCORE)
    return tier_score(rank.tier, rank.division, rank.league_points)


def kda_bonus(kda: float) -> float:
    raw = (kda - KDA_CENTER) * KDA_MULTIPLIER
    return max(-KDA_CAP, min(KDA_CAP, raw))


def win_rate_bonus(win_rate: float) -> float:
    return (win_rate - WIN_RATE_CENTER) * WIN_RATE_MULTIPLIER


def activity_bonus(season_games: int) -> float:
    """Diminishing reward for a larger season sample (from the rank entry)."""
    if season_games <= 0:
        return 0.0
    return min(float(ACTIVITY_CAP), math.log10(season_games) * ACTIVITY_MULTIPLIER)


def role_stats_bonus(preferred_lane: Optional[Role], cs_per_minute: float, vision_per_minute: float) -> float:
    # Supports are scored on vision, every other lane on creep score
    if preferred_lane is Role.UTILITY:
        return (vision_per_minute - VISION_PER_MINUTE_CENTER) * VISION_PER_MINUTE_MULTIPLIER
    return (cs_per_minute - CS_PER_MINUTE_CENTER) * CS_PER_MINUTE_MULTIPLIER


def score_player(
    rank: Optional[RankEntry],
    *,
    kda: float,
    win_rate: float,
    preferred_lane: Optional[Role],
    cs_per_minute: float,
    vision_per_minute: float,
) -> ScoreBreakdown:
    """Full breakdown for a player with at least one analyzed game."""
    return ScoreBreakdown(
        tier_score=rank_score(rank),
        kda_bonus=kda_bonus(kda),
        win_rate_bonus=win_rate_bonus(win_rate),
        activity_bonus=activity_bonus(rank.season_games if rank else 0),
        role_stats_bonus=role_stats_bonus(preferred_lane, cs_per_minute, vision_per_minute),
    )


def score_tier_only(rank: Optional[RankEntry]) -> ScoreBreakdown:
    """Breakdown for a player with no usable recent games."""
    return ScoreBreakdown(tier_score=rank_score(rank))
