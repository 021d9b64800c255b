"""Catalog title normalizer.

Turns raw text scraped from a catalog tile into the canonical key used
both for the rating cache and for the OMDb query.
"""

import re

_WHITESPACE_RE = re.compile(r"\s+")
_YEAR_RE = re.compile(r"\(\d{4}\)")

# Dual-language listings: "Amour - L'amour"
LANGUAGE_SEPARATOR = " - "


def normalize_title(raw: str | None) -> str:
    """Normalize raw candidate text into a canonical title.

    Steps, in order: trim, collapse whitespace, drop the first
    parenthesized year, keep the part before the first " - ".

    Args:
        raw: Raw text (element text, alt text, data attribute).

    Returns:
        Canonical title, or "" when nothing usable remains.
    """
    if not raw:
        return ""

    title = _WHITESPACE_RE.sub(" ", raw.strip())
    title = _YEAR_RE.sub("", title, count=1).strip()

    if LANGUAGE_SEPARATOR in title:
        title = title.split(LANGUAGE_SEPARATOR, 1)[0].strip()

    return title
