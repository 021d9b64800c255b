"""Pipeline context shared by every stage of one page session."""

from dataclasses import dataclass, field

from bs4 import Tag

from src.enrichment.cache import RatingCache
from src.enrichment.omdb.client import OMDbClient
from src.enrichment.profiles import SiteProfile
from src.enrichment.types import Rating


@dataclass
class PageContext:
    """State of one page lifecycle.

    Built once when a page session starts and dropped on navigation;
    nothing here lives at module level.

    Attributes:
        document: Parsed page being enriched in place.
        profile: Active site profile.
        api_key: OMDb API key read from the credential store.
        client: OMDb client.
        cache: Session-scoped rating cache.
    """

    document: Tag
    profile: SiteProfile
    api_key: str
    client: OMDbClient
    cache: RatingCache = field(default_factory=RatingCache)

    async def lookup(self, title: str) -> Rating:
        """Cached rating lookup: cache first, OMDb on a miss."""
        return await self.cache.get_or_fetch(title, self._fetch)

    async def _fetch(self, title: str) -> Rating:
        return await self.client.fetch_rating(title, self.api_key)
