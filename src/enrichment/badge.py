"""Rating badge templates.

Builds the badge container appended next to each catalog entry and
fills it with the loading, error or rating markup.
"""

from bs4 import BeautifulSoup, Tag

from src.enrichment.types import Rating

BADGE_CLASS = "criterion-rt-rating"

FRESH_ICON = "\U0001f345"  # tomato
ROTTEN_ICON = "\U0001f922"  # nauseated face

LOADING_TEXT = "Loading RT rating..."
ERROR_TEXT = "Rating unavailable"
NO_RATING_TEXT = "No rating available"

_LINK_ATTRS = {"target": "_blank", "rel": "noopener noreferrer"}

# Tags are created here and moved into the page tree on append
_FACTORY = BeautifulSoup("", "html.parser")


def _tag(name: str, css_class: str | None = None, text: str | None = None, **attrs: str) -> Tag:
    tag_attrs = dict(attrs)
    if css_class:
        tag_attrs["class"] = css_class
    tag = _FACTORY.new_tag(name, attrs=tag_attrs)
    if text is not None:
        tag.string = text
    return tag


def create_container() -> Tag:
    """Create an empty badge container."""
    return _tag("div", BADGE_CLASS)


def render_loading(container: Tag) -> Tag:
    """Show the loading placeholder."""
    container.clear()
    container.append(_tag("span", "rt-loading", LOADING_TEXT))
    return container


def render_error(container: Tag) -> Tag:
    """Show the "unavailable" state after a failed lookup."""
    container.clear()
    container.append(_tag("span", "rt-error", ERROR_TEXT))
    return container


def render_rating(container: Tag, rating: Rating) -> Tag:
    """Render a Rating into the container.

    Display rules, in order: tomatometer (plus optional IMDb segment),
    IMDb only, then the "no rating" label.
    """
    container.clear()

    if not rating.has_any_score:
        container.append(_tag("span", "rt-na", NO_RATING_TEXT))
        return container

    content = _tag("div", "rt-rating-content")
    if rating.tomatometer_percent is not None:
        content.append(_tomatometer_link(rating))
    if rating.imdb_score is not None:
        content.append(_imdb_segment(rating))
    container.append(content)
    return container


def _tomatometer_link(rating: Rating) -> Tag:
    link = _tag(
        "a",
        "rt-link",
        href=rating.rt_url,
        title="View on Rotten Tomatoes",
        **_LINK_ATTRS,
    )
    link.append(_tag("span", "rt-icon", FRESH_ICON if rating.is_fresh else ROTTEN_ICON))
    link.append(_tag("span", "rt-score", f"{rating.tomatometer_percent}%"))
    return link


def _imdb_segment(rating: Rating) -> Tag:
    """IMDb score, linked when the IMDb URL is known."""
    score = _tag("span", "imdb-score", f"IMDb: {rating.imdb_score}/10")
    if not rating.imdb_url:
        return score

    link = _tag(
        "a",
        "imdb-link",
        href=rating.imdb_url,
        title="View on IMDb",
        **_LINK_ATTRS,
    )
    link.append(score)
    return link
