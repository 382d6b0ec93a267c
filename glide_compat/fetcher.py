"""Fetch documentation and client source text using Playwright's request API."""

import logging
from collections.abc import Iterable
from pathlib import Path
from urllib.parse import unquote, urlparse

from playwright.async_api import APIRequestContext, async_playwright
from playwright.async_api import Error as PlaywrightError

from glide_compat.errors import FetchError

logger = logging.getLogger(__name__)

GLIDE_RAW_BASE = "https://raw.githubusercontent.com/valkey-io/valkey-glide/main/node/src"

BASE_CLIENT_URL = f"{GLIDE_RAW_BASE}/BaseClient.ts"
GLIDE_CLIENT_URL = f"{GLIDE_RAW_BASE}/GlideClient.ts"
GLIDE_CLUSTER_CLIENT_URL = f"{GLIDE_RAW_BASE}/GlideClusterClient.ts"
GLIDE_JSON_URL = f"{GLIDE_RAW_BASE}/server-modules/GlideJson.ts"

COMMANDS_WIKI_MD_URL = (
    "https://raw.githubusercontent.com/wiki/valkey-io/valkey-glide/"
    "ValKey-Commands-Implementation-Progress.md"
)
COMMANDS_WIKI_HTML_URL = (
    "https://github.com/valkey-io/valkey-glide/wiki/ValKey-Commands-Implementation-Progress"
)

# Sources whose union is the current GLIDE Node surface
GLIDE_SOURCE_URLS = [
    BASE_CLIENT_URL,
    GLIDE_CLIENT_URL,
    GLIDE_CLUSTER_CLIENT_URL,
    GLIDE_JSON_URL,
]


class SourceFetcher:
    """Fetch text over HTTP(S) or from file:// URLs.

    The Playwright request context is only started when the first HTTP fetch
    happens, so file-only runs never launch Playwright.
    """

    def __init__(self):
        self._playwright = None
        self._request: APIRequestContext | None = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        """Dispose the request context and stop Playwright."""
        if self._request:
            await self._request.dispose()
            self._request = None
        if self._playwright:
            await self._playwright.stop()
            self._playwright = None
            logger.info("Request context closed")

    async def fetch_text(self, url: str) -> str:
        """Fetch a document as text.

        Args:
            url: http, https or file:// URL

        Returns:
            The response body

        Raises:
            FetchError: If the URL is invalid, the response is not OK, or the
                request fails
        """
        parsed = urlparse(url)
        if parsed.scheme == "file":
            return self._read_file(url, Path(unquote(parsed.path)))
        if parsed.scheme not in ("http", "https"):
            logger.error(f"Invalid URL scheme: {url}")
            raise FetchError(f"Invalid URL: {url}", url=url)

        request = await self._ensure_request()
        try:
            logger.info(f"Fetching {url}")
            response = await request.get(url)
        except PlaywrightError as e:
            logger.error(f"Failed to fetch {url}: {e}")
            raise FetchError(f"fetch failed {url}: {e}", url=url) from e

        try:
            if not response.ok:
                raise FetchError(
                    f"fetch failed {url}: {response.status}", url=url, status=response.status
                )
            return await response.text()
        finally:
            await response.dispose()

    async def fetch_all(self, urls: Iterable[str]) -> dict[str, str]:
        """Fetch several URLs one after another, keyed by URL."""
        return {url: await self.fetch_text(url) for url in urls}

    async def _ensure_request(self) -> APIRequestContext:
        if self._request is None:
            self._playwright = await async_playwright().start()
            self._request = await self._playwright.request.new_context()
            logger.info("Request context started")
        return self._request

    def _read_file(self, url: str, path: Path) -> str:
        try:
            return path.read_text()
        except OSError as e:
            logger.error(f"Failed to read {path}: {e}")
            raise FetchError(f"fetch failed {url}: {e}", url=url) from e
