"""Profile-aware title extraction for candidate elements."""

from bs4 import Tag

from src.enrichment.normalizer import normalize_title
from src.enrichment.profiles import SiteProfile, TitleRule

# Universal fallbacks, tried after the profile rules
FALLBACK_RULES: tuple[TitleRule, ...] = (
    TitleRule(selector="img[alt]", attribute="alt"),
    TitleRule(attribute="data-title"),
    TitleRule(attribute="data-film-title"),
    TitleRule(attribute="data-movie-title"),
)


def extract_title(profile: SiteProfile, element: Tag) -> str | None:
    """Extract the canonical title of a candidate element.

    Args:
        profile: Active site profile.
        element: Candidate element.

    Returns:
        Canonical title, or None when no rule yields usable text.
    """
    for rule in (*profile.title_rules, *FALLBACK_RULES):
        title = normalize_title(_apply_rule(rule, element))
        if title:
            return title
    return None


def _apply_rule(rule: TitleRule, element: Tag) -> str | None:
    """Read the raw text a rule points at.

    Returns:
        Raw text, or None when the target node or attribute is missing.
    """
    node = element.select_one(rule.selector) if rule.selector else element
    if node is None:
        return None

    if rule.attribute is None:
        return node.get_text(" ")

    value = node.get(rule.attribute)
    if isinstance(value, list):
        return " ".join(value)
    return value


def find_insertion_point(profile: SiteProfile, element: Tag) -> Tag:
    """Locate where the rating badge goes inside a candidate.

    The badge carries its own links, so targets inside an ``<a>`` are
    skipped. A candidate that is itself a link gets the badge on the
    link's parent.

    Returns:
        First element matched by the profile's insertion selectors, else
        the candidate itself.
    """
    for selector in profile.insertion_selectors:
        node = element.select_one(selector)
        if node is not None and _enclosing_link(node) is None:
            return node

    link = _enclosing_link(element)
    if link is not None and link.parent is not None:
        return link.parent
    return element


def _enclosing_link(node: Tag) -> Tag | None:
    """Outermost ``<a>`` containing the node, the node included."""
    links = [node] if node.name == "a" else []
    links.extend(node.find_parents("a"))
    return links[-1] if links else None
