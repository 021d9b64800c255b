"""Streaming catalog rating enrichment.

Detects film entries in streaming-site catalog pages, resolves them to
Rotten Tomatoes / IMDb ratings through OMDb and injects a rating badge
next to each entry.

Usage:
    from src.enrichment import PageSession, JsonFileCredentialStore

    store = JsonFileCredentialStore.from_settings()
    async with PageSession(soup, "www.criterionchannel.com", store) as session:
        await session.start()
"""

from src.enrichment.cache import RatingCache
from src.enrichment.context import PageContext
from src.enrichment.credentials import (
    OMDB_API_KEY_NAME,
    CredentialStore,
    JsonFileCredentialStore,
    MemoryCredentialStore,
    NoCredentialError,
    save_api_key,
)
from src.enrichment.extraction import extract_title
from src.enrichment.normalizer import normalize_title
from src.enrichment.omdb import (
    InvalidApiKeyError,
    NotFoundError,
    OMDbClient,
    OMDbClientError,
    TransportError,
)
from src.enrichment.orchestrator import EnrichmentOrchestrator, EnrichmentOutcome, EnrichmentStats
from src.enrichment.profiles import UNKNOWN_PROFILE, SiteProfile, TitleRule, resolve_profile
from src.enrichment.scanner import scan
from src.enrichment.session import PageSession
from src.enrichment.types import Rating
from src.enrichment.watcher import MutationRecord, MutationWatcher

__all__ = [
    # Pipeline
    "PageSession",
    "PageContext",
    "EnrichmentOrchestrator",
    "EnrichmentOutcome",
    "EnrichmentStats",
    "MutationWatcher",
    "MutationRecord",
    # Stages
    "normalize_title",
    "extract_title",
    "scan",
    "resolve_profile",
    "SiteProfile",
    "TitleRule",
    "UNKNOWN_PROFILE",
    # Ratings
    "Rating",
    "RatingCache",
    "OMDbClient",
    # Credentials
    "CredentialStore",
    "MemoryCredentialStore",
    "JsonFileCredentialStore",
    "OMDB_API_KEY_NAME",
    "save_api_key",
    # Exceptions
    "OMDbClientError",
    "NotFoundError",
    "TransportError",
    "InvalidApiKeyError",
    "NoCredentialError",
]
