"""Rank tier and division enumerations."""
from enum import Enum
from typing import Optional


class Tier(Enum):
    """League of Legends rank tiers, lowest to highest."""

    IRON = "IRON"
    BRONZE = "BRONZE"
    SILVER = "SILVER"
    GOLD = "GOLD"
    PLATINUM = "PLATINUM"
    EMERALD = "EMERALD"
    DIAMOND = "DIAMOND"
    MASTER = "MASTER"
    GRANDMASTER = "GRANDMASTER"
    CHALLENGER = "CHALLENGER"

    @property
    def is_apex(self) -> bool:
        """Master and above have no divisions, only league points."""
        return self in (Tier.MASTER, Tier.GRANDMASTER, Tier.CHALLENGER)

    @property
    def base_score(self) -> int:
        """Base value of the tier on the team-making score scale."""
        return _TIER_BASE_SCORES[self]

    @classmethod
    def from_string(cls, tier_str: Optional[str]) -> Optional['Tier']:
        """Create Tier from string, None when unknown."""
        if not tier_str:
            return None
        try:
            return cls[tier_str.upper()]
        except KeyError:
            return None


_TIER_BASE_SCORES = {
    Tier.IRON: 0,
    Tier.BRONZE: 400,
    Tier.SILVER: 800,
    Tier.GOLD: 1200,
    Tier.PLATINUM: 1600,
    Tier.EMERALD: 2000,
    Tier.DIAMOND: 2400,
    Tier.MASTER: 2800,
    Tier.GRANDMASTER: 2800,
    Tier.CHALLENGER: 2800,
}


class Division(Enum):
    """Sub-bands inside a non-apex tier. IV is the lowest."""

    IV = "IV"
    III = "III"
    II = "II"
    I = "I"

    @property
    def offset(self) -> int:
        """Score offset added on top of the tier base."""
        return {"IV": 0, "III": 100, "II": 200, "I": 300}[self.value]

    @classmethod
    def from_string(cls, division_str: Optional[str]) -> Optional['Division']:
        if not division_str:
            return None
        try:
            return cls[division_str.upper()]
        except KeyError:
            return None
