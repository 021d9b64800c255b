"""Unit tests for the element scanner."""

import pytest
from bs4 import BeautifulSoup

from src.enrichment.profiles import UNKNOWN_PROFILE, SiteProfile
from src.enrichment.scanner import (
    PROCESSED_ATTRIBUTE,
    is_processed,
    mark_processed,
    scan,
    unprocessed,
)

TWO_SELECTOR_PROFILE = SiteProfile(
    name="Test",
    hosts=("test.local",),
    item_selectors=(".tile-a", ".tile-b"),
)


@pytest.mark.unit
class TestScan:
    """Tests for scan."""

    @staticmethod
    def test_first_matching_selector_wins() -> None:
        soup = BeautifulSoup(
            '<div class="tile-b">1</div><div class="tile-b">2</div><div class="tile-b">3</div>',
            "html.parser",
        )

        elements = scan(TWO_SELECTOR_PROFILE, soup)

        assert [element.get_text() for element in elements] == ["1", "2", "3"]

    @staticmethod
    def test_later_selectors_ignored_once_one_matches() -> None:
        soup = BeautifulSoup(
            '<div class="tile-a">a</div><div class="tile-b">b1</div><div class="tile-b">b2</div>',
            "html.parser",
        )

        elements = scan(TWO_SELECTOR_PROFILE, soup)

        assert [element.get_text() for element in elements] == ["a"]

    @staticmethod
    def test_document_order(criterion_soup: BeautifulSoup) -> None:
        from src.enrichment.profiles import CRITERION_CHANNEL

        elements = scan(CRITERION_CHANNEL, criterion_soup)

        assert len(elements) == 4
        assert "The Thing" in elements[0].get_text()

    @staticmethod
    def test_no_matches() -> None:
        soup = BeautifulSoup("<p>empty catalog</p>", "html.parser")

        assert scan(TWO_SELECTOR_PROFILE, soup) == []

    @staticmethod
    def test_unknown_profile_returns_nothing(criterion_soup: BeautifulSoup) -> None:
        assert scan(UNKNOWN_PROFILE, criterion_soup) == []


@pytest.mark.unit
class TestProcessedMarker:
    @staticmethod
    def test_mark_and_check() -> None:
        soup = BeautifulSoup('<div class="tile-a"></div>', "html.parser")
        element = soup.div

        assert not is_processed(element)

        mark_processed(element)

        assert is_processed(element)
        assert element[PROCESSED_ATTRIBUTE] == "true"

    @staticmethod
    def test_marker_survives_serialization() -> None:
        soup = BeautifulSoup('<div class="tile-a"></div>', "html.parser")
        mark_processed(soup.div)

        reparsed = BeautifulSoup(str(soup), "html.parser")

        assert is_processed(reparsed.div)

    @staticmethod
    def test_unprocessed_filter() -> None:
        soup = BeautifulSoup(
            '<div class="tile-a">1</div><div class="tile-a">2</div>',
            "html.parser",
        )
        first, second = soup.select(".tile-a")
        mark_processed(first)

        assert unprocessed([first, second]) == [second]
