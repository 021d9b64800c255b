"""OMDb rating source package.

Exports:
    OMDbClient: Async HTTP client mapping lookups to Rating records.
    RTUrlBuilder: Rotten Tomatoes slug/URL builder.
    IMDbUrlBuilder: IMDb title URL builder.
    Exceptions: OMDbClientError and its subclasses.
"""

from src.enrichment.omdb.client import (
    InvalidApiKeyError,
    NotFoundError,
    OMDbClient,
    OMDbClientError,
    TransportError,
)
from src.enrichment.omdb.url_builder import IMDbUrlBuilder, RTUrlBuilder

__all__ = [
    # Client
    "OMDbClient",
    # URL builders
    "RTUrlBuilder",
    "IMDbUrlBuilder",
    # Exceptions
    "OMDbClientError",
    "NotFoundError",
    "TransportError",
    "InvalidApiKeyError",
]
