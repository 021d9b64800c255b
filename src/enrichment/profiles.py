"""Site profile registry.

Each supported streaming site is described by one immutable SiteProfile:
where catalog items live, how to read their title and where to put the
rating badge. Adding a site means adding a table entry, nothing else.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class TitleRule:
    """One way of reading a title from a candidate element.

    Attributes:
        selector: CSS selector relative to the candidate. None targets the
            candidate itself.
        attribute: Attribute to read. None reads the node's text content.
    """

    selector: str | None = None
    attribute: str | None = None


@dataclass(frozen=True)
class SiteProfile:
    """Extraction rules for one supported site.

    Attributes:
        name: Human-readable site name.
        hosts: Hostnames matched (exactly or as substring) against the page host.
        item_selectors: Candidate selectors, first one with matches wins.
        title_rules: Title extraction rules, first non-empty result wins.
        insertion_selectors: Badge insertion points inside a candidate.
    """

    name: str
    hosts: tuple[str, ...] = ()
    item_selectors: tuple[str, ...] = ()
    title_rules: tuple[TitleRule, ...] = ()
    insertion_selectors: tuple[str, ...] = ()

    @property
    def is_unknown(self) -> bool:
        """True for the sentinel returned for unsupported hosts."""
        return not self.hosts


UNKNOWN_PROFILE = SiteProfile(name="unknown")


# =============================================================================
# SUPPORTED SITES
# =============================================================================

CRITERION_CHANNEL = SiteProfile(
    name="Criterion Channel",
    hosts=("criterionchannel.com",),
    item_selectors=(
        "li.js-collection-item.item-type-video",
        ".js-collection-item",
        ".browse-item-card",
    ),
    title_rules=(TitleRule(selector=".browse-item-title strong"),),
    insertion_selectors=(
        ".padding-small",
        ".browse-item-title",
        ".grid-item-padding",
    ),
)

CRITERION_COLLECTION = SiteProfile(
    name="Criterion Collection",
    hosts=("criterion.com",),
    item_selectors=(
        "tr.gridFilm",
        ".criterion-film-card",
    ),
    title_rules=(
        TitleRule(selector="td.g-title span"),
        TitleRule(selector=".criterion-film-card__title"),
    ),
    insertion_selectors=(
        "td.g-title",
        ".criterion-film-card__meta",
    ),
)

MUBI = SiteProfile(
    name="MUBI",
    hosts=("mubi.com",),
    item_selectors=(
        "[data-testid='film-tile']",
        "a[href*='/films/']",
    ),
    title_rules=(
        TitleRule(selector="h3"),
        TitleRule(attribute="aria-label"),
    ),
    insertion_selectors=(
        "[data-testid='film-tile-meta']",
        "h3",
    ),
)

KANOPY = SiteProfile(
    name="Kanopy",
    hosts=("kanopy.com",),
    item_selectors=(
        ".product-list-item",
        ".video-tile",
    ),
    title_rules=(
        TitleRule(selector=".product-title"),
        TitleRule(selector=".video-tile__title"),
        TitleRule(selector="a[title]", attribute="title"),
    ),
    insertion_selectors=(
        ".product-info",
        ".video-tile__details",
    ),
)

PROFILES: tuple[SiteProfile, ...] = (
    CRITERION_CHANNEL,
    CRITERION_COLLECTION,
    MUBI,
    KANOPY,
)


# =============================================================================
# LOOKUP
# =============================================================================


def resolve_profile(host: str | None) -> SiteProfile:
    """Find the profile for a page host.

    Args:
        host: Page hostname, e.g. "www.criterionchannel.com". A port
            suffix is ignored.

    Returns:
        Matching SiteProfile, or UNKNOWN_PROFILE.
    """
    if not host:
        return UNKNOWN_PROFILE

    normalized = host.strip().lower().split(":", 1)[0]

    for profile in PROFILES:
        for known_host in profile.hosts:
            if normalized == known_host or known_host in normalized:
                return profile

    return UNKNOWN_PROFILE


def supported_hosts() -> list[str]:
    """List every hostname with a profile, in lookup order."""
    return [host for profile in PROFILES for host in profile.hosts]
