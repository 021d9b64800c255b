"""Element scanner.

Applies a SiteProfile's item selectors to the current document and
returns the candidate catalog elements.
"""

from collections.abc import Iterable

from bs4 import Tag

from src.enrichment.profiles import SiteProfile
from src.enrichment.utils.logger import setup_logger

logger = setup_logger("enrichment.scanner")

# Marker persisted on the element itself
PROCESSED_ATTRIBUTE = "data-rt-processed"


def scan(profile: SiteProfile, document: Tag) -> list[Tag]:
    """Find candidate elements for a profile.

    Selectors are tried in order. The first selector that matches at
    least one element is authoritative: its whole match set is returned
    and later selectors are not consulted.

    Args:
        profile: Active site profile.
        document: Parsed page (BeautifulSoup or any Tag).

    Returns:
        Matched elements, empty when nothing matches or the site is unknown.
    """
    if profile.is_unknown:
        return []

    for selector in profile.item_selectors:
        elements = document.select(selector)
        if elements:
            logger.debug(
                f"Found {len(elements)} potential movie elements using selector: {selector}"
            )
            return list(elements)

    logger.debug(f"No movie elements found for profile: {profile.name}")
    return []


def is_processed(element: Tag) -> bool:
    """Whether the element already carries the processed marker."""
    return element.has_attr(PROCESSED_ATTRIBUTE)


def mark_processed(element: Tag) -> None:
    """Persist the processed marker on the element."""
    element[PROCESSED_ATTRIBUTE] = "true"


def unprocessed(elements: Iterable[Tag]) -> list[Tag]:
    """Filter out elements that were already enriched or skipped."""
    return [element for element in elements if not is_processed(element)]
