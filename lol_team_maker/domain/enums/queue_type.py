"""Ranked queues."""
from enum import Enum
from typing import Optional


class QueueType(Enum):
    """The two ranked queues. The value is the numeric id used by match-v5;
    league-v4 names the same queues with strings (``api_queue_name``)."""

    RANKED_SOLO_5x5 = 420
    RANKED_FLEX_SR = 440

    @property
    def queue_id(self) -> int:
        return self.value

    @property
    def api_queue_name(self) -> str:
        return self.name

    @classmethod
    def from_api_name(cls, name: Optional[str]) -> Optional['QueueType']:
        """Map a league entry ``queueType`` to a QueueType, None for other queues."""
        if not name:
            return None
        return cls.__members__.get(name)

    @classmethod
    def by_preference(cls) -> list['QueueType']:
        """Queues in the order their rank is trusted: solo first, then flex."""
        return [cls.RANKED_SOLO_5x5, cls.RANKED_FLEX_SR]
