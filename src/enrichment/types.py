"""Rating data types.

TypedDict definitions for the raw OMDb payload and the immutable
Rating record handed to the badge renderer.
"""

from dataclasses import dataclass
from typing import NotRequired, TypedDict


class OMDbRatingEntry(TypedDict):
    """One entry of the OMDb ``Ratings`` list."""

    Source: str
    Value: str


class OMDbResponse(TypedDict):
    """Subset of the OMDb title lookup response used by the pipeline."""

    Response: str
    Error: NotRequired[str]
    Title: NotRequired[str]
    Year: NotRequired[str]
    Ratings: NotRequired[list[OMDbRatingEntry]]
    imdbRating: NotRequired[str]
    imdbID: NotRequired[str]


@dataclass(frozen=True)
class Rating:
    """Resolved ratings for one catalog title.

    Attributes:
        tomatometer_percent: Rotten Tomatoes critic score (0-100).
        imdb_score: IMDb score as published, e.g. "8.1".
        imdb_id: IMDb identifier, e.g. "tt0084787".
        resolved_title: Title as returned by the provider.
        resolved_year: Year as returned by the provider.
        rt_url: Rotten Tomatoes deep link.
        imdb_url: IMDb deep link when an id is known.
    """

    tomatometer_percent: int | None
    imdb_score: str | None
    imdb_id: str | None
    resolved_title: str
    resolved_year: str
    rt_url: str
    imdb_url: str | None = None

    @property
    def is_fresh(self) -> bool:
        """Tomatometer at or above the fresh threshold."""
        return self.tomatometer_percent is not None and self.tomatometer_percent >= 60

    @property
    def has_any_score(self) -> bool:
        """At least one score is available for display."""
        return self.tomatometer_percent is not None or self.imdb_score is not None
