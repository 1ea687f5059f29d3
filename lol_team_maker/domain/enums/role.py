"""Lane roles."""
from enum import Enum
from typing import Optional


class Role(Enum):
    """The five lanes, named as match-v5 reports ``teamPosition``.

    Declaration order is significant: it is the order lanes are filled in
    and the tie-break order when picking a preferred lane.
    """

    TOP = "TOP"
    JUNGLE = "JUNGLE"
    MIDDLE = "MIDDLE"
    BOTTOM = "BOTTOM"
    UTILITY = "UTILITY"

    @property
    def short_name(self) -> str:
        """Label used in console tables."""
        return _SHORT_NAMES[self]

    @classmethod
    def from_position(cls, position: Optional[str]) -> Optional['Role']:
        """Map a match-v5 position string to a Role.

        Positions outside the five lanes (``""``, ``"Invalid"``, ``"NONE"``)
        map to None rather than to a fallback lane.
        """
        if not position:
            return None
        return cls.__members__.get(position.upper())


_SHORT_NAMES = {
    Role.TOP: "top",
    Role.JUNGLE: "jg",
    Role.MIDDLE: "mid",
    Role.BOTTOM: "adc",
    Role.UTILITY: "sup",
}
