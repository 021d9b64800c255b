"""Shared pytest fixtures for enrichment tests."""

from collections.abc import Callable
from typing import Any

import httpx
import pytest
from bs4 import BeautifulSoup

from src.enrichment.omdb.client import OMDbClient
from src.enrichment.types import Rating

OMDB_TEST_URL = "https://omdb.test/"


@pytest.fixture(autouse=True, scope="function")
def mock_env_for_tests(monkeypatch: pytest.MonkeyPatch) -> None:
    """Mock environment variables for reproducible tests."""
    monkeypatch.setenv("LOG_LEVEL", "INFO")
    monkeypatch.setenv("OMDB_BASE_URL", OMDB_TEST_URL)
    monkeypatch.delenv("OMDB_API_KEY", raising=False)
    monkeypatch.delenv("OMDB_TIMEOUT", raising=False)


# ---------------------------------------------------------------------------
# OMDb payloads
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_omdb_payload() -> dict[str, Any]:
    """OMDb success response for The Thing (1982)."""
    return {
        "Title": "The Thing",
        "Year": "1982",
        "Ratings": [
            {"Source": "Internet Movie Database", "Value": "8.2/10"},
            {"Source": "Rotten Tomatoes", "Value": "83%"},
            {"Source": "Metacritic", "Value": "57/100"},
        ],
        "imdbRating": "8.2",
        "imdbID": "tt0084787",
        "Type": "movie",
        "Response": "True",
    }


@pytest.fixture
def not_found_payload() -> dict[str, Any]:
    """OMDb answer for an unknown title."""
    return {"Response": "False", "Error": "Movie not found!"}


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------


class RecordingOMDb:
    """Fake OMDb endpoint answering from a title -> payload table."""

    def __init__(self, payloads: dict[str, dict[str, Any]]) -> None:
        self.payloads = payloads
        self.requests: list[httpx.Request] = []

    @property
    def titles(self) -> list[str | None]:
        return [request.url.params.get("t") for request in self.requests]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        payload = self.payloads.get(request.url.params.get("t", ""))
        if payload is None:
            return httpx.Response(200, json={"Response": "False", "Error": "Movie not found!"})
        return httpx.Response(200, json=payload)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def fake_omdb(sample_omdb_payload: dict[str, Any]) -> RecordingOMDb:
    """Fake OMDb knowing The Thing only."""
    return RecordingOMDb({"The Thing": sample_omdb_payload})


@pytest.fixture
def make_client() -> Callable[[httpx.AsyncBaseTransport], OMDbClient]:
    """Factory for clients bound to a mock transport."""

    def _make(transport: httpx.AsyncBaseTransport) -> OMDbClient:
        return OMDbClient(base_url=OMDB_TEST_URL, max_retries=1, transport=transport)

    return _make


# ---------------------------------------------------------------------------
# Ratings & pages
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_rating() -> Rating:
    """Fresh rating with a linked IMDb score."""
    return Rating(
        tomatometer_percent=87,
        imdb_score="8.1",
        imdb_id="tt2278388",
        resolved_title="The Grand Budapest Hotel",
        resolved_year="2014",
        rt_url="https://www.rottentomatoes.com/m/grand_budapest_hotel",
        imdb_url="https://www.imdb.com/title/tt2278388/",
    )


CRITERION_CHANNEL_HTML = """
<html><body>
  <ul class="browse-list">
    <li class="js-collection-item item-type-video">
      <div class="grid-item-padding">
        <div class="browse-item-title"><strong>  The Thing   (1982) </strong></div>
        <div class="padding-small"></div>
      </div>
    </li>
    <li class="js-collection-item item-type-video">
      <div class="grid-item-padding">
        <div class="browse-item-title"><strong>Amour - L'amour</strong></div>
      </div>
    </li>
    <li class="js-collection-item item-type-video">
      <img src="poster.jpg" alt="Unknown Film">
    </li>
    <li class="js-collection-item item-type-video">
      <div class="grid-item-padding"></div>
    </li>
  </ul>
</body></html>
"""


@pytest.fixture
def criterion_soup() -> BeautifulSoup:
    """Criterion Channel catalog page with four tiles."""
    return BeautifulSoup(CRITERION_CHANNEL_HTML, "html.parser")
