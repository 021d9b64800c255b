"""OMDb API client.

Handles HTTP communication with the Open Movie Database, maps its
title lookup payload into Rating records and builds provider deep links.
"""

import logging
import re
from types import TracebackType
from typing import Any

import httpx
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from src.enrichment.omdb.url_builder import IMDbUrlBuilder, RTUrlBuilder
from src.enrichment.types import OMDbRatingEntry, OMDbResponse, Rating
from src.enrichment.utils.logger import setup_logger
from src.settings import settings

logger = setup_logger("enrichment.omdb")

ROTTEN_TOMATOES_SOURCE = "Rotten Tomatoes"
NOT_AVAILABLE = "N/A"
DEFAULT_NOT_FOUND_MESSAGE = "Movie not found"
INVALID_API_KEY_MESSAGE = "Invalid API key!"

# Known title used to test a freshly entered key
VERIFICATION_TITLE = "The Matrix"

_PERCENT_RE = re.compile(r"^\s*(\d{1,3})\s*%?")


class OMDbClientError(Exception):
    """Base exception for OMDb client errors."""

    pass


class NotFoundError(OMDbClientError):
    """Raised when OMDb answers ``Response: "False"`` for a title."""

    def __init__(self, message: str, *, title: str = "") -> None:
        super().__init__(message)
        self.message = message
        self.title = title


class TransportError(OMDbClientError):
    """Raised on network failures or unreadable responses."""

    pass


class InvalidApiKeyError(OMDbClientError):
    """Raised when OMDb rejects the API key."""

    pass


class OMDbClient:
    """Async HTTP client for the OMDb title endpoint.

    The underlying ``httpx.AsyncClient`` is created lazily and owned by
    this object; close it with ``aclose()`` or use ``async with``.

    Attributes:
        base_url: OMDb API base URL.
        max_retries: Attempts per request on transport failures.
    """

    def __init__(
        self,
        base_url: str | None = None,
        max_retries: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize client from settings.

        Args:
            base_url: Override for OMDB_BASE_URL.
            max_retries: Override for OMDB_MAX_RETRIES.
            transport: Optional httpx transport (tests, proxies).
        """
        self.base_url = base_url or settings.omdb.base_url
        self.max_retries = max_retries or settings.omdb.max_retries
        self._timeout = settings.omdb.timeout
        self._user_agent = settings.omdb.user_agent
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    # -------------------------------------------------------------------------
    # Context Manager
    # -------------------------------------------------------------------------

    async def __aenter__(self) -> "OMDbClient":
        """Enter context and create HTTP client."""
        self._ensure_client()
        return self

    async def __aexit__(
        self,
        _exc_type: type[BaseException] | None,
        _exc_val: BaseException | None,
        _exc_tb: TracebackType | None,
    ) -> None:
        """Exit context and close HTTP client."""
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client if it was created."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout),
                headers={"User-Agent": self._user_agent},
                transport=self._transport,
            )
        return self._client

    # -------------------------------------------------------------------------
    # HTTP
    # -------------------------------------------------------------------------

    async def _get(self, params: dict[str, Any]) -> OMDbResponse:
        """Execute GET request with retries on transport failures.

        Args:
            params: Query parameters.

        Returns:
            Decoded JSON object.

        Raises:
            TransportError: On network failure or unreadable body.
        """
        client = self._ensure_client()

        try:
            async for attempt in AsyncRetrying(
                retry=retry_if_exception_type(httpx.TransportError),
                stop=stop_after_attempt(self.max_retries),
                wait=wait_exponential(multiplier=1, min=1, max=10),
                before_sleep=before_sleep_log(logger, logging.WARNING),
                reraise=True,
            ):
                with attempt:
                    response = await client.get(self.base_url, params=params)
        except httpx.HTTPError as e:
            raise TransportError(f"OMDb request failed: {e}") from e

        return self._handle_response(response)

    @staticmethod
    def _handle_response(response: httpx.Response) -> OMDbResponse:
        """Decode the OMDb JSON body.

        OMDb reports lookup errors inside the JSON body, sometimes with a
        4xx status, so the body is read before the status is considered.

        Raises:
            TransportError: When the body is not a JSON object.
        """
        try:
            data = response.json()
        except ValueError as e:
            raise TransportError(
                f"Invalid JSON from OMDb (HTTP {response.status_code})"
            ) from e

        if not isinstance(data, dict):
            raise TransportError("Unexpected OMDb payload: not a JSON object")

        if "Response" not in data and response.is_error:
            raise TransportError(f"OMDb API error {response.status_code}")

        return data  # type: ignore[return-value]

    # -------------------------------------------------------------------------
    # API Endpoints
    # -------------------------------------------------------------------------

    async def fetch_rating(self, title: str, api_key: str) -> Rating:
        """Look up a movie by title and map it to a Rating.

        Args:
            title: Canonical title used as query term.
            api_key: OMDb API key.

        Returns:
            Rating built from the provider's response.

        Raises:
            NotFoundError: When OMDb has no match for the title.
            InvalidApiKeyError: When OMDb rejects the key.
            TransportError: On network failure or an unreadable payload.
        """
        data = await self._get({"apikey": api_key, "t": title, "type": "movie"})

        if data.get("Response") == "False":
            message = data.get("Error") or DEFAULT_NOT_FOUND_MESSAGE
            if message == INVALID_API_KEY_MESSAGE:
                raise InvalidApiKeyError(message)
            raise NotFoundError(message, title=title)

        try:
            rating = self.to_rating(data, fallback_title=title)
        except (KeyError, TypeError, AttributeError, ValueError) as e:
            raise TransportError(f"Unexpected OMDb payload for '{title}': {e!r}") from e

        logger.debug(
            f"Resolved '{title}' -> '{rating.resolved_title}' ({rating.resolved_year})"
        )
        return rating

    async def verify_api_key(self, api_key: str) -> bool:
        """Check a key against the live API with one known title.

        Returns:
            False only when OMDb explicitly rejects the key.

        Raises:
            TransportError: When the API cannot be reached.
        """
        try:
            await self.fetch_rating(VERIFICATION_TITLE, api_key)
        except InvalidApiKeyError:
            return False
        except NotFoundError:
            # Key accepted, lookup simply missed
            return True
        return True

    # -------------------------------------------------------------------------
    # Mapping
    # -------------------------------------------------------------------------

    @classmethod
    def to_rating(cls, data: OMDbResponse, fallback_title: str = "") -> Rating:
        """Map an OMDb success payload to a Rating.

        Args:
            data: Decoded OMDb response.
            fallback_title: Query title, used if the payload has no Title.

        Returns:
            Immutable Rating record.
        """
        title = data.get("Title")
        resolved_title = title if isinstance(title, str) and title else fallback_title
        year = data.get("Year")
        imdb_id = cls._none_if_na(data.get("imdbID"))
        rt_entry = cls._find_rating(data.get("Ratings"), ROTTEN_TOMATOES_SOURCE)

        return Rating(
            tomatometer_percent=cls._parse_percent(rt_entry.get("Value")) if rt_entry else None,
            imdb_score=cls._none_if_na(data.get("imdbRating")),
            imdb_id=imdb_id,
            resolved_title=resolved_title,
            resolved_year=year if isinstance(year, str) else "",
            rt_url=RTUrlBuilder.build_film_url(resolved_title),
            imdb_url=IMDbUrlBuilder.build_title_url(imdb_id),
        )

    @staticmethod
    def _find_rating(
        ratings: list[OMDbRatingEntry] | None,
        source: str,
    ) -> OMDbRatingEntry | None:
        if not isinstance(ratings, list):
            return None
        for entry in ratings:
            if isinstance(entry, dict) and entry.get("Source") == source:
                return entry
        return None

    @staticmethod
    def _parse_percent(value: object) -> int | None:
        """Parse "87%" into 87.

        Returns:
            Int in 0-100 or None.
        """
        if not isinstance(value, str) or not value:
            return None
        match = _PERCENT_RE.match(value)
        if not match:
            return None
        percent = int(match.group(1))
        return percent if 0 <= percent <= 100 else None

    @staticmethod
    def _none_if_na(value: object) -> str | None:
        if not isinstance(value, str) or not value or value == NOT_AVAILABLE:
            return None
        return value
