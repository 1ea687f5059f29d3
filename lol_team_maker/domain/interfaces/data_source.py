"""Upstream game-data source contract."""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
from ..enums import QueueType


class RiotDataSource(ABC):
    """The four upstream operations the analyzer depends on.

    Implementations return raw JSON payloads and raise
    :class:`~lol_team_maker.domain.errors.UpstreamRejected` for terminal
    failures. Throttling is handled below this interface.
    """

    @abstractmethod
    async def get_account_by_riot_id(self, game_name: str, tag_line: str) -> Dict[str, Any]:
        """Account (``puuid``, ``gameName``, ``tagLine``) for a Riot ID."""

    @abstractmethod
    async def get_league_entries_by_puuid(self, puuid: str) -> List[Dict[str, Any]]:
        """Ranked league entries, zero to one per ranked queue."""

    @abstractmethod
    async def get_match_ids_by_puuid(
        self,
        puuid: str,
        count: int = 20,
        queue: Optional[QueueType] = None,
    ) -> List[str]:
        """Most recent ranked match ids, newest first."""

    @abstractmethod
    async def get_match_by_id(self, match_id: str) -> Dict[str, Any]:
        """Full match-v5 payload."""
