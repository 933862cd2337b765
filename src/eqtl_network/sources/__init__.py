"""Source retrieval: local files or static HTTP URLs, read fully into memory."""

from eqtl_network.sources.client import CachedSourceClient, ResponseTooLarge
from eqtl_network.sources.loader import SourceError, SourceLoader, SourceTexts

__all__ = [
    "CachedSourceClient",
    "ResponseTooLarge",
    "SourceError",
    "SourceLoader",
    "SourceTexts",
]
