"""Data source settings.

Exports configuration classes for external rating sources:
- OMDb API (REST)
"""

from src.settings.sources.omdb import OMDbSettings

__all__ = [
    "OMDbSettings",
]
