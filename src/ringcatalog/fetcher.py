"""HTTP fetcher for configuration documents and catalog sources.

Transport failures and non-success responses are raised as
:class:`~ringcatalog.errors.CatalogError` so callers can contain them to the
one URL that failed.
"""

from __future__ import annotations

import httpx
import structlog

from ringcatalog.config import FetcherSettings
from ringcatalog.errors import CatalogError, ErrorCode

log = structlog.get_logger()


def build_http_client(settings: FetcherSettings | None = None) -> httpx.AsyncClient:
    """Create the shared ``httpx.AsyncClient`` used by every fetch in the process."""
    settings = settings or FetcherSettings()
    return httpx.AsyncClient(
        headers=settings.headers,
        timeout=httpx.Timeout(settings.timeout_seconds, connect=settings.connect_timeout_seconds),
        limits=httpx.Limits(
            max_connections=settings.max_connections,
            max_keepalive_connections=settings.max_connections,
        ),
        follow_redirects=True,
    )


class Fetcher:
    def __init__(self, client: httpx.AsyncClient, settings: FetcherSettings | None = None) -> None:
        self._client = client
        self._settings = settings or FetcherSettings()

    async def fetch(self, url: str, params: dict[str, str] | None = None) -> str:
        """GET ``url`` and return the body text.

        Raises:
            CatalogError: ``SOURCE_NOT_FOUND`` for 4xx, ``SOURCE_FETCH_FAILED``
                for 5xx, network errors and malformed URLs, ``SOURCE_EMPTY`` for a
                blank body.
        """
        try:
            response = await self._client.get(url, params=params)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            log.warning("fetch_network_error", url=url, error=str(exc))
            raise CatalogError(
                ErrorCode.SOURCE_FETCH_FAILED,
                f"Network error fetching {url}: {exc}",
                recoverable=True,
            ) from exc

        if response.is_client_error:
            raise CatalogError(
                ErrorCode.SOURCE_NOT_FOUND,
                f"HTTP {response.status_code} fetching {url}",
                recoverable=False,
            )
        if not response.is_success:
            raise CatalogError(
                ErrorCode.SOURCE_FETCH_FAILED,
                f"HTTP {response.status_code} fetching {url}",
                recoverable=True,
            )

        content = response.text
        if not content.strip():
            raise CatalogError(
                ErrorCode.SOURCE_EMPTY,
                f"Empty response body from {url}",
                recoverable=False,
            )
        log.debug("fetch_complete", url=url, status=response.status_code, size=len(content))
        return content
