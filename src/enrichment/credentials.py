"""Credential storage for the OMDb API key.

The pipeline only needs an async key-value store with ``get``/``set``.
Two implementations are provided: an in-memory store and a JSON file
store that persists across runs.
"""

import asyncio
import json
import re
from pathlib import Path
from typing import Protocol

from src.enrichment.omdb.client import InvalidApiKeyError, OMDbClient
from src.enrichment.utils.logger import setup_logger
from src.settings import settings

logger = setup_logger("enrichment.credentials")

OMDB_API_KEY_NAME = "omdbApiKey"

# OMDb keys are 8 alphanumeric characters
_API_KEY_RE = re.compile(r"^[A-Za-z0-9]{8}$")


class NoCredentialError(Exception):
    """Raised when no OMDb API key is stored."""

    pass


class CredentialStore(Protocol):
    """Async key-value store holding the API key."""

    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str) -> None: ...


class MemoryCredentialStore:
    """Credential store kept in process memory."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        return self._values.get(key)

    async def set(self, key: str, value: str) -> None:
        self._values[key] = value


class JsonFileCredentialStore:
    """Credential store persisted as a JSON object on disk.

    File I/O runs in a worker thread to keep the event loop free.
    """

    def __init__(self, path: Path, defaults: dict[str, str] | None = None) -> None:
        """Initialize store.

        Args:
            path: JSON file location. Created on first ``set``.
            defaults: Values returned for keys absent from the file.
        """
        self.path = path
        self._defaults = dict(defaults or {})

    @classmethod
    def from_settings(cls) -> "JsonFileCredentialStore":
        """Store at CREDENTIALS_FILE, seeded with OMDB_API_KEY when set."""
        defaults = {}
        if settings.omdb.is_configured:
            defaults[OMDB_API_KEY_NAME] = settings.omdb.api_key
        return cls(settings.pipeline.credentials_path, defaults=defaults)

    async def get(self, key: str) -> str | None:
        values = await asyncio.to_thread(self._read)
        value = values.get(key)
        if isinstance(value, str) and value:
            return value
        return self._defaults.get(key)

    async def set(self, key: str, value: str) -> None:
        await asyncio.to_thread(self._write_value, key, value)

    def _read(self) -> dict[str, object]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.warning(f"Corrupt credentials file ignored: {self.path}")
            return {}
        return data if isinstance(data, dict) else {}

    def _write_value(self, key: str, value: str) -> None:
        values = self._read()
        values[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(values, indent=2), encoding="utf-8")


# =============================================================================
# KEY HELPERS
# =============================================================================


def is_valid_api_key_format(api_key: str) -> bool:
    """Check the OMDb key shape (8 alphanumeric characters)."""
    return bool(_API_KEY_RE.match(api_key.strip()))


async def load_api_key(store: CredentialStore) -> str:
    """Read the OMDb API key from a store.

    Raises:
        NoCredentialError: When no key is stored.
    """
    api_key = await store.get(OMDB_API_KEY_NAME)
    if not api_key:
        raise NoCredentialError(
            f"No OMDb API key configured. Store one under '{OMDB_API_KEY_NAME}' "
            "or set OMDB_API_KEY."
        )
    return api_key


async def save_api_key(
    store: CredentialStore,
    client: OMDbClient,
    api_key: str,
) -> None:
    """Validate a new key and persist it.

    The key is checked for shape, then tested once against the live API.

    Args:
        store: Destination store.
        client: OMDb client used for the live check.
        api_key: Key as entered by the user.

    Raises:
        InvalidApiKeyError: Malformed key or key rejected by OMDb.
        TransportError: When OMDb cannot be reached.
    """
    api_key = api_key.strip()

    if not api_key:
        raise InvalidApiKeyError("Please enter an API key")

    if not is_valid_api_key_format(api_key):
        raise InvalidApiKeyError(
            "Invalid API key format. OMDB API keys are 8 characters long."
        )

    if not await client.verify_api_key(api_key):
        raise InvalidApiKeyError("Invalid API key. Please check and try again.")

    await store.set(OMDB_API_KEY_NAME, api_key)
    logger.info("OMDb API key saved")
