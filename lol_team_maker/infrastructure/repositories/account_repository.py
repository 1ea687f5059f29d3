"""Account and rank repository implementation."""
import logging
from typing import List, Optional

from ...domain.entities import AccountRef, Identity, RankEntry
from ...domain.enums import Division, QueueType, Tier
from ...domain.errors import FetchError, ResolutionFailure
from ...domain.interfaces import RiotDataSource
from ..cache import ResultCache

logger = logging.getLogger(__name__)


class AccountRepository:
    """Resolves Riot IDs to accounts and looks up their ranked standing."""

    def __init__(
        self,
        api_client: RiotDataSource,
        cache: Optional[ResultCache[Identity, AccountRef]] = None,
    ):
        """
        Initialize account repository.

        Args:
            api_client: upstream data source
            cache: de-duplicates lookups of the same identity; failures are
                remembered so a bad Riot ID listed twice costs one call
        """
        self.api_client = api_client
        self.cache = cache if cache is not None else ResultCache("accounts", remember_failures=True)

    async def resolve(self, identity: Identity) -> AccountRef:
        """
        Resolve a Riot ID to an account.

        Raises:
            ResolutionFailure: the account does not exist or could not be fetched
        """
        try:
            return await self.cache.get_or_fetch(identity, lambda: self._fetch_account(identity))
        except FetchError as e:
            raise ResolutionFailure(identity, e) from e

    async def _fetch_account(self, identity: Identity) -> AccountRef:
        data = await self.api_client.get_account_by_riot_id(identity.game_name, identity.tag_line)
        puuid = data.get('puuid')
        if not puuid:
            raise ResolutionFailure(identity)
        return AccountRef(
            puuid=puuid,
            game_name=data.get('gameName', identity.game_name),
            tag_line=data.get('tagLine', identity.tag_line),
        )

    async def get_rank_entries(self, puuid: str) -> List[RankEntry]:
        """All ranked entries for the account; [] when unranked or unavailable."""
        try:
            entries = await self.api_client.get_league_entries_by_puuid(puuid)
        except FetchError as e:
            logger.warning(f"Rank lookup for {puuid} failed, treating as unranked: {e}")
            return []

        result = []
        for entry in entries:
            try:
                parsed = self.parse_entry(entry)
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                logger.warning(f"Malformed league entry for {puuid} skipped: {e}")
                continue
            if parsed is not None:
                result.append(parsed)
        return result

    async def get_rank(self, puuid: str) -> Optional[RankEntry]:
        """Solo queue rank if present, else flex, else None."""
        entries = {e.queue: e for e in await self.get_rank_entries(puuid)}
        for queue in QueueType.by_preference():
            if queue in entries:
                return entries[queue]
        return None

    @staticmethod
    def parse_entry(entry: dict) -> Optional[RankEntry]:
        """Parse a league-v4 entry; None for other queues or unknown tiers."""
        queue = QueueType.from_api_name(entry.get('queueType'))
        tier = Tier.from_string(entry.get('tier'))
        if queue is None or tier is None:
            return None
        return RankEntry(
            queue=queue,
            tier=tier,
            division=None if tier.is_apex else Division.from_string(entry.get('rank')),
            league_points=int(entry.get('leaguePoints', 0)),
            wins=int(entry.get('wins', 0)),
            losses=int(entry.get('losses', 0)),
        )
