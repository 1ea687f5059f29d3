"""Match repository implementation."""
import logging
from typing import List, Optional

from ...domain.entities import MatchRecord, ParticipantRow
from ...domain.enums import Role
from ...domain.errors import FetchError, UpstreamRejected
from ...domain.interfaces import RiotDataSource
from ..cache import ResultCache

logger = logging.getLogger(__name__)


class MatchRepository:
    """Match ids and match records, with records memoized by match id."""

    def __init__(
        self,
        api_client: RiotDataSource,
        cache: Optional[ResultCache[str, MatchRecord]] = None,
    ):
        """
        Initialize match repository.

        Args:
            api_client: upstream data source
            cache: shared match cache; pass the same instance to every
                repository that should share records
        """
        self.api_client = api_client
        self.cache = cache if cache is not None else ResultCache("matches")

    async def get_recent_match_ids(self, puuid: str, count: int = 20) -> List[str]:
        """Most recent ranked match ids, or [] if the lookup failed."""
        try:
            return (await self.api_client.get_match_ids_by_puuid(puuid, count=count))[:count]
        except FetchError as e:
            logger.warning(f"Match history for {puuid} unavailable: {e}")
            return []

    async def get_match(self, match_id: str) -> Optional[MatchRecord]:
        """
        Get a single match by ID.

        Concurrent requests for one id share a single upstream call.

        Returns:
            MatchRecord or None if it could not be fetched or parsed
        """
        try:
            return await self.cache.get_or_fetch(match_id, lambda: self._fetch_match(match_id))
        except FetchError as e:
            logger.warning(f"Match {match_id} unavailable: {e}")
            return None

    async def _fetch_match(self, match_id: str) -> MatchRecord:
        data = await self.api_client.get_match_by_id(match_id)
        try:
            return self.parse_match(data)
        except (KeyError, TypeError, ValueError) as e:
            raise UpstreamRejected(f"malformed match {match_id}: {e}") from e

    @staticmethod
    def parse_match(data: dict) -> MatchRecord:
        """Parse raw match-v5 data into a MatchRecord."""
        metadata = data['metadata']
        info = data['info']
        participants = tuple(
            MatchRepository._parse_participant(p) for p in info.get('participants', [])
        )
        return MatchRecord(
            match_id=metadata['matchId'],
            game_duration=int(info.get('gameDuration', 0)),
            participants=participants,
            queue_id=int(info.get('queueId', 0)),
            game_creation=int(info.get('gameCreation', 0)),
        )

    @staticmethod
    def _parse_participant(p_data: dict) -> ParticipantRow:
        return ParticipantRow(
            puuid=p_data.get('puuid', ''),
            kills=int(p_data.get('kills', 0)),
            deaths=int(p_data.get('deaths', 0)),
            assists=int(p_data.get('assists', 0)),
            total_minions_killed=int(p_data.get('totalMinionsKilled', 0)),
            neutral_minions_killed=int(p_data.get('neutralMinionsKilled', 0)),
            vision_score=int(p_data.get('visionScore', 0)),
            individual_position=Role.from_position(p_data.get('individualPosition')),
            team_position=Role.from_position(p_data.get('teamPosition')),
            win=bool(p_data.get('win', False)),
        )
