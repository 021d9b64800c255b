"""Deep-link builders for rating providers.

Rotten Tomatoes film pages are addressed by a slug derived from the
title; IMDb pages by the provider id.
"""

import re


class RTUrlBuilder:
    """Builds Rotten Tomatoes film URLs from resolved titles."""

    BASE_URL = "https://www.rottentomatoes.com"

    @classmethod
    def build_slug(cls, title: str) -> str:
        """Build the RT slug for a title.

        Lowercase, ASCII alphanumerics only, underscores between words,
        one leading "the_" dropped: "The Thing" -> "thing".

        Args:
            title: Resolved film title.

        Returns:
            URL slug (without /m/ prefix).
        """
        slug = title.lower()

        # Anything outside [a-z0-9 ] goes, accented letters included
        slug = re.sub(r"[^a-z0-9\s]", "", slug)

        slug = re.sub(r"\s+", "_", slug)
        slug = re.sub(r"^the_", "", slug)

        # Clean up multiple underscores
        slug = re.sub(r"_+", "_", slug)

        return slug.strip("_")

    @classmethod
    def build_film_url(cls, title: str) -> str:
        """Build the absolute film URL.

        Args:
            title: Resolved film title.

        Returns:
            URL like https://www.rottentomatoes.com/m/alien.
        """
        return f"{cls.BASE_URL}/m/{cls.build_slug(title)}"


class IMDbUrlBuilder:
    """Builds IMDb title URLs from provider ids."""

    BASE_URL = "https://www.imdb.com"

    @classmethod
    def build_title_url(cls, imdb_id: str | None) -> str | None:
        """Build the IMDb title URL.

        Args:
            imdb_id: IMDb id such as "tt0084787".

        Returns:
            Title URL, or None when the id is missing or "N/A".
        """
        if not imdb_id or imdb_id == "N/A":
            return None
        return f"{cls.BASE_URL}/title/{imdb_id}/"
