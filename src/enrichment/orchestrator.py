"""Enrichment orchestrator.

Drives the per-element pipeline: mark, extract title, show a loading
badge, resolve the rating through the cache, render the result.
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from bs4 import Tag

from src.enrichment.badge import create_container, render_error, render_loading, render_rating
from src.enrichment.context import PageContext
from src.enrichment.extraction import extract_title, find_insertion_point
from src.enrichment.omdb.client import OMDbClientError
from src.enrichment.scanner import is_processed, mark_processed
from src.enrichment.utils.logger import setup_logger


class EnrichmentOutcome(StrEnum):
    """What happened to one candidate element."""

    SKIPPED = "skipped"
    UNTITLED = "untitled"
    ENRICHED = "enriched"
    FAILED = "failed"


@dataclass
class EnrichmentStats:
    """Counters for one pass over the candidates."""

    scanned: int = 0
    skipped: int = 0
    untitled: int = 0
    enriched: int = 0
    failed: int = 0

    def record(self, outcome: EnrichmentOutcome) -> None:
        """Count one element outcome."""
        if outcome is EnrichmentOutcome.SKIPPED:
            self.skipped += 1
        elif outcome is EnrichmentOutcome.UNTITLED:
            self.untitled += 1
        elif outcome is EnrichmentOutcome.ENRICHED:
            self.enriched += 1
        else:
            self.failed += 1

    def to_dict(self) -> dict[str, Any]:
        """Convert stats to dictionary."""
        return {
            "scanned": self.scanned,
            "skipped": self.skipped,
            "untitled": self.untitled,
            "enriched": self.enriched,
            "failed": self.failed,
        }


class EnrichmentOrchestrator:
    """Enriches candidate elements of one page.

    The processed marker is set before the first await, so overlapping
    passes over the same elements never enrich a node twice.
    """

    def __init__(self, context: PageContext) -> None:
        """Initialize orchestrator.

        Args:
            context: Page context (document, profile, client, cache).
        """
        self.context = context
        self._logger = setup_logger("enrichment.orchestrator")

    async def process(self, elements: list[Tag]) -> EnrichmentStats:
        """Enrich candidates one after the other.

        A failure on one element never stops its siblings.

        Args:
            elements: Candidates returned by the scanner.

        Returns:
            Outcome counters for this pass.
        """
        stats = EnrichmentStats(scanned=len(elements))

        for element in elements:
            try:
                outcome = await self.enrich_element(element)
            except Exception:
                self._logger.exception("Unexpected error while enriching an element")
                outcome = EnrichmentOutcome.FAILED
            stats.record(outcome)

        if stats.enriched or stats.failed:
            self._logger.info(
                f"Enrichment pass: {stats.enriched} enriched, {stats.failed} failed, "
                f"{stats.skipped} already processed, {stats.untitled} without title"
            )
        return stats

    async def enrich_element(self, element: Tag) -> EnrichmentOutcome:
        """Run the pipeline for one candidate.

        Args:
            element: Candidate element.

        Returns:
            Outcome for this element.
        """
        if is_processed(element):
            return EnrichmentOutcome.SKIPPED

        # Must happen before any suspension point
        mark_processed(element)

        profile = self.context.profile
        title = extract_title(profile, element)
        if title is None:
            return EnrichmentOutcome.UNTITLED

        container = render_loading(create_container())
        find_insertion_point(profile, element).append(container)

        try:
            rating = await self.context.lookup(title)
        except OMDbClientError as e:
            self._logger.error(f'Error fetching rating for "{title}": {e}')
            render_error(container)
            return EnrichmentOutcome.FAILED
        except Exception:
            # The badge is already on the page; never leave it loading
            self._logger.exception(f'Unexpected error fetching rating for "{title}"')
            render_error(container)
            return EnrichmentOutcome.FAILED

        render_rating(container, rating)
        return EnrichmentOutcome.ENRICHED
