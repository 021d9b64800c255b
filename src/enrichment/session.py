"""Page session: lifecycle of the enrichment pipeline for one page.

Usage:
    async with PageSession(soup, "www.criterionchannel.com", store) as session:
        await session.start()
        ...
        session.notify_mutations([MutationRecord(added_nodes=(tile,))])
"""

import asyncio
from collections.abc import Iterable

from bs4 import Tag

from src.enrichment.context import PageContext
from src.enrichment.credentials import CredentialStore, NoCredentialError, load_api_key
from src.enrichment.omdb.client import OMDbClient
from src.enrichment.orchestrator import EnrichmentOrchestrator, EnrichmentStats
from src.enrichment.profiles import resolve_profile
from src.enrichment.scanner import scan
from src.enrichment.utils.logger import setup_logger
from src.enrichment.watcher import MutationRecord, MutationWatcher
from src.settings import settings


class PageSession:
    """Owns the PageContext, orchestrator and watcher of one page.

    Closing the session is the navigation/reload teardown: the pending
    rescan is dropped and the rating cache cleared.
    """

    def __init__(
        self,
        document: Tag,
        host: str,
        credential_store: CredentialStore,
        client: OMDbClient | None = None,
        debounce_seconds: float | None = None,
    ) -> None:
        """Initialize session.

        Args:
            document: Parsed page, enriched in place.
            host: Page hostname used to pick the site profile.
            credential_store: Store holding the OMDb API key.
            client: Shared OMDb client. One is created (and closed) when omitted.
            debounce_seconds: Override for PIPELINE_DEBOUNCE_SECONDS.
        """
        self.document = document
        self.host = host
        self.profile = resolve_profile(host)
        self._store = credential_store
        self._client = client or OMDbClient()
        self._owns_client = client is None
        self._debounce = (
            settings.pipeline.debounce_seconds if debounce_seconds is None else debounce_seconds
        )
        self._logger = setup_logger("enrichment.session")

        self.context: PageContext | None = None
        self.watcher: MutationWatcher | None = None
        self._orchestrator: EnrichmentOrchestrator | None = None
        self._missing_key_logged = False
        self._start_lock = asyncio.Lock()

    async def __aenter__(self) -> "PageSession":
        return self

    async def __aexit__(self, *_exc: object) -> None:
        await self.aclose()

    @property
    def started(self) -> bool:
        """The pipeline is running for this page."""
        return self.context is not None

    async def start(self) -> bool:
        """Read the credential, run the first pass and arm the watcher.

        Overlapping calls are serialized; only the first one builds the
        pipeline.

        Returns:
            True when the pipeline started; False without credential or on
            an unsupported site.
        """
        async with self._start_lock:
            if self.started:
                return True

            if self.profile.is_unknown:
                return False

            try:
                api_key = await load_api_key(self._store)
            except NoCredentialError as e:
                if not self._missing_key_logged:
                    self._logger.warning(str(e))
                    self._missing_key_logged = True
                return False

            self.context = PageContext(
                document=self.document,
                profile=self.profile,
                api_key=api_key,
                client=self._client,
            )
            self._orchestrator = EnrichmentOrchestrator(self.context)
            self.watcher = MutationWatcher(self.process_page, delay=self._debounce)
            self._logger.info(f"Enrichment started for {self.profile.name} ({self.host})")

            await self.process_page()
            return True

    async def on_credential_changed(self) -> bool:
        """Retry starting after the stored key changed."""
        self._missing_key_logged = False
        return await self.start()

    async def process_page(self) -> EnrichmentStats:
        """Scan the document and enrich new candidates."""
        if self.context is None or self._orchestrator is None:
            return EnrichmentStats()

        elements = scan(self.context.profile, self.context.document)
        if not elements:
            self._logger.debug("No movie elements found on this page.")
        return await self._orchestrator.process(elements)

    def notify_mutations(self, records: Iterable[MutationRecord]) -> bool:
        """Forward a batch of mutation records to the watcher.

        Returns:
            True when a rescan was (re)scheduled.
        """
        if self.watcher is None:
            return False
        return self.watcher.notify(records)

    async def aclose(self) -> None:
        """Tear the session down (navigation or reload)."""
        if self.watcher is not None:
            self.watcher.disconnect()
        if self.context is not None:
            self.context.cache.clear()
        if self._owns_client:
            await self._client.aclose()

        self.context = None
        self._orchestrator = None
        self.watcher = None
