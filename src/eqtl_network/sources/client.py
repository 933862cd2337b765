"""HTTP client for static source files with retry logic and persistent caching."""

import logging
from pathlib import Path

import requests
import requests_cache
from requests.exceptions import ConnectionError, HTTPError, Timeout
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from eqtl_network.config.schema import NetworkConfig

logger = logging.getLogger(__name__)

STREAM_CHUNK_SIZE = 64 * 1024


class ResponseTooLarge(Exception):
    """A response body exceeded the configured byte limit."""

    def __init__(self, url: str, size: int, limit: int):
        self.url = url
        self.size = size
        self.limit = limit
        super().__init__(f"{url}: {size} bytes exceeds limit of {limit}")


class CachedSourceClient:
    """
    HTTP client with retry logic and persistent SQLite caching.

    Features:
    - Automatic retry on 5xx/network errors with exponential backoff
    - Persistent SQLite cache with configurable TTL
    """

    def __init__(
        self,
        cache_dir: Path,
        max_retries: int = 3,
        cache_ttl: int = 86400,
        timeout: int = 30,
    ):
        """
        Initialize client with caching and retry logic.

        Args:
            cache_dir: Directory for SQLite cache storage
            max_retries: Maximum retry attempts on failure
            cache_ttl: Cache time-to-live in seconds (0 = infinite)
            timeout: Request timeout in seconds
        """
        self.cache_dir = Path(cache_dir)
        self.max_retries = max_retries
        self.timeout = timeout

        self.cache_dir.mkdir(parents=True, exist_ok=True)

        cache_path = self.cache_dir / "source_cache"
        expire_after = cache_ttl if cache_ttl > 0 else None

        self.session = requests_cache.CachedSession(
            cache_name=str(cache_path),
            backend="sqlite",
            expire_after=expire_after,
        )

    def _create_retry_decorator(self):
        """Create retry decorator with exponential backoff."""
        return retry(
            stop=stop_after_attempt(self.max_retries),
            wait=wait_exponential(multiplier=1, min=2, max=30),
            retry=retry_if_exception_type((HTTPError, Timeout, ConnectionError)),
            reraise=True,
        )

    def get(self, url: str, **kwargs) -> requests.Response:
        """
        Make GET request with retry logic and caching.

        Raises:
            HTTPError: On HTTP error after retries exhausted
            Timeout: On timeout after retries exhausted
            ConnectionError: On connection error after retries exhausted
        """
        @self._create_retry_decorator()
        def _get_with_retry():
            response = self.session.get(url, timeout=self.timeout, **kwargs)
            response.raise_for_status()
            return response

        response = _get_with_retry()
        if getattr(response, "from_cache", False):
            logger.debug(f"Cache hit for {url}")
        return response

    def get_text(self, url: str, max_bytes: int | None = None, **kwargs) -> str:
        """
        Fetch a URL and return the decoded response body.

        With max_bytes set, a cache miss is streamed with the cache disabled
        and aborted once the body passes the limit; the accepted body is then
        written to the cache. Cache hits were size-checked when stored.

        Raises:
            ResponseTooLarge: If Content-Length or the streamed body exceeds max_bytes
            UnicodeDecodeError: If the body is not valid UTF-8
        """
        if max_bytes is None:
            return self._decode(self.get(url, **kwargs))

        cached = self.session.get(url, only_if_cached=True, timeout=self.timeout, **kwargs)
        if cached.status_code != 504:
            logger.debug(f"Cache hit for {url}")
            return self._decode(cached)

        with self.session.cache_disabled():
            response = self.get(url, stream=True, **kwargs)
        try:
            body = self._read_bounded(url, response, max_bytes)
        finally:
            response.close()

        text = body.decode(response.encoding or "utf-8")
        # Body was consumed by iter_content; hand the accepted bytes to the cache
        response._content = body
        self.session.cache.save_response(response)
        return text

    @staticmethod
    def _read_bounded(url: str, response: requests.Response, max_bytes: int) -> bytes:
        declared = response.headers.get("Content-Length")
        if declared is not None and declared.isdigit() and int(declared) > max_bytes:
            raise ResponseTooLarge(url, int(declared), max_bytes)

        chunks = []
        total = 0
        for chunk in response.iter_content(chunk_size=STREAM_CHUNK_SIZE):
            total += len(chunk)
            if total > max_bytes:
                raise ResponseTooLarge(url, total, max_bytes)
            chunks.append(chunk)
        return b"".join(chunks)

    @staticmethod
    def _decode(response: requests.Response) -> str:
        if response.encoding is None:
            response.encoding = "utf-8"
        return response.content.decode(response.encoding)

    @classmethod
    def from_config(cls, config: NetworkConfig) -> "CachedSourceClient":
        """
        Create client from network configuration.

        Args:
            config: NetworkConfig instance

        Returns:
            Configured CachedSourceClient instance
        """
        return cls(
            cache_dir=config.cache_dir,
            max_retries=config.api.max_retries,
            cache_ttl=config.api.cache_ttl_seconds,
            timeout=config.api.timeout_seconds,
        )
