"""Read the relations, statistics and summary sources as text."""

import logging
from dataclasses import dataclass
from pathlib import Path

from requests.exceptions import RequestException

from eqtl_network.config.schema import NetworkConfig
from eqtl_network.sources.client import CachedSourceClient, ResponseTooLarge

logger = logging.getLogger(__name__)


class SourceError(RuntimeError):
    """A source could not be read (missing file, HTTP failure, size cap)."""

    def __init__(self, location: str, reason: str):
        self.location = location
        self.reason = reason
        super().__init__(f"{location}: {reason}")


@dataclass(frozen=True)
class SourceTexts:
    """Fully-read source documents for one pipeline load."""
    relations: str
    statistics: str
    summary: str | None = None


def _is_url(location: str) -> bool:
    return location.startswith(("http://", "https://"))


class SourceLoader:
    """Reads sources from local paths or static URLs.

    The pipeline itself never performs I/O; it receives the texts returned here.
    """

    def __init__(
        self,
        max_bytes: int = 50_000_000,
        client: CachedSourceClient | None = None,
    ):
        self.max_bytes = max_bytes
        self._client = client

    @classmethod
    def from_config(cls, config: NetworkConfig) -> "SourceLoader":
        return cls(max_bytes=config.sources.max_source_bytes)

    def _get_client(self, config: NetworkConfig | None = None) -> CachedSourceClient:
        if self._client is None:
            if config is None:
                raise SourceError("<http>", "no HTTP client configured")
            self._client = CachedSourceClient.from_config(config)
        return self._client

    def _check_size(self, location: str, size: int) -> None:
        if size > self.max_bytes:
            raise SourceError(location, f"{size} bytes exceeds limit of {self.max_bytes}")

    def read(self, location: str, config: NetworkConfig | None = None) -> str:
        """Read one source as text.

        Raises:
            SourceError: If the file is missing, the request fails, the source
                exceeds max_bytes, or its content is not valid UTF-8
        """
        if _is_url(location):
            try:
                text = self._get_client(config).get_text(location, max_bytes=self.max_bytes)
            except ResponseTooLarge as e:
                raise SourceError(location, f"{e.size} bytes exceeds limit of {e.limit}") from e
            except RequestException as e:
                raise SourceError(location, f"request failed: {e}") from e
            except UnicodeDecodeError as e:
                raise SourceError(location, f"not valid UTF-8: {e}") from e
            self._check_size(location, len(text.encode("utf-8")))
            logger.info(f"Fetched {location} ({len(text)} chars)")
            return text

        path = Path(location)
        if not path.is_file():
            raise SourceError(location, "file not found")
        self._check_size(location, path.stat().st_size)
        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise SourceError(location, f"not valid UTF-8: {e}") from e
        logger.info(f"Read {path} ({len(text)} chars)")
        return text

    def load(self, config: NetworkConfig) -> SourceTexts:
        """Read all configured sources.

        Raises:
            SourceError: If any required source cannot be read
        """
        sources = config.sources
        relations = self.read(config.resolve_source(sources.relations), config)
        statistics = self.read(config.resolve_source(sources.statistics), config)
        summary = None
        if sources.summary:
            summary = self.read(config.resolve_source(sources.summary), config)
        return SourceTexts(relations=relations, statistics=statistics, summary=summary)
