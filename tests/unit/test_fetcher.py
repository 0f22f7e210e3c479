"""Unit tests for ringcatalog.fetcher."""

from __future__ import annotations

import httpx
import pytest
import respx

from ringcatalog.config import FetcherSettings
from ringcatalog.errors import CatalogError, ErrorCode
from ringcatalog.fetcher import Fetcher, build_http_client

# ---------------------------------------------------------------------------
# build_http_client
# ---------------------------------------------------------------------------


class TestBuildHttpClient:
    async def test_client_configuration(self) -> None:
        async with build_http_client() as client:
            assert isinstance(client, httpx.AsyncClient)
            assert client.follow_redirects is True
            assert client.headers["Origin"] == "https://teams.microsoft.com"
            assert client.timeout.read == 30.0
            assert client.timeout.connect == 10.0

    async def test_custom_headers_and_timeout(self) -> None:
        settings = FetcherSettings(headers={"User-Agent": "ringcatalog-test"}, timeout_seconds=5)
        async with build_http_client(settings) as client:
            assert client.headers["User-Agent"] == "ringcatalog-test"
            assert "Origin" not in client.headers
            assert client.timeout.read == 5.0


# ---------------------------------------------------------------------------
# Fetcher
# ---------------------------------------------------------------------------


class TestFetcher:
    async def test_successful_fetch(self) -> None:
        with respx.mock:
            respx.get("https://cdn.test/apps.json").mock(
                return_value=httpx.Response(200, text='{"value": {}}')
            )
            async with httpx.AsyncClient() as client:
                fetcher = Fetcher(client)
                result = await fetcher.fetch("https://cdn.test/apps.json")
                assert result == '{"value": {}}'

    async def test_params_are_merged_into_query(self) -> None:
        with respx.mock:
            route = respx.route(method="GET", host="config.test", path="/catalog").mock(
                return_value=httpx.Response(200, text="{}")
            )
            async with httpx.AsyncClient() as client:
                fetcher = Fetcher(client)
                await fetcher.fetch(
                    "https://config.test/catalog?agents=Catalog",
                    params={"AudienceGroup": "ring1"},
                )
            request = route.calls.last.request
            assert request.url.params["agents"] == "Catalog"
            assert request.url.params["AudienceGroup"] == "ring1"

    async def test_404_raises_error(self) -> None:
        with respx.mock:
            respx.get("https://cdn.test/missing").mock(return_value=httpx.Response(404))
            async with httpx.AsyncClient() as client:
                fetcher = Fetcher(client)
                with pytest.raises(CatalogError) as exc_info:
                    await fetcher.fetch("https://cdn.test/missing")
                assert exc_info.value.code == ErrorCode.SOURCE_NOT_FOUND
                assert exc_info.value.recoverable is False

    async def test_500_raises_error(self) -> None:
        with respx.mock:
            respx.get("https://cdn.test/error").mock(return_value=httpx.Response(500))
            async with httpx.AsyncClient() as client:
                fetcher = Fetcher(client)
                with pytest.raises(CatalogError) as exc_info:
                    await fetcher.fetch("https://cdn.test/error")
                assert exc_info.value.code == ErrorCode.SOURCE_FETCH_FAILED
                assert exc_info.value.recoverable is True

    async def test_network_error_raises_error(self) -> None:
        with respx.mock:
            respx.get("https://cdn.test/timeout").mock(
                side_effect=httpx.ConnectError("Connection refused")
            )
            async with httpx.AsyncClient() as client:
                fetcher = Fetcher(client)
                with pytest.raises(CatalogError) as exc_info:
                    await fetcher.fetch("https://cdn.test/timeout")
                assert exc_info.value.code == ErrorCode.SOURCE_FETCH_FAILED
                assert exc_info.value.recoverable is True

    async def test_malformed_url_raises_error(self) -> None:
        with respx.mock:
            async with httpx.AsyncClient() as client:
                fetcher = Fetcher(client)
                with pytest.raises(CatalogError) as exc_info:
                    await fetcher.fetch("https://cdn.test/apps\x00.json")
                assert exc_info.value.code == ErrorCode.SOURCE_FETCH_FAILED

    async def test_timeout_raises_error(self) -> None:
        with respx.mock:
            respx.get("https://cdn.test/slow").mock(side_effect=httpx.ReadTimeout("timed out"))
            async with httpx.AsyncClient() as client:
                fetcher = Fetcher(client)
                with pytest.raises(CatalogError) as exc_info:
                    await fetcher.fetch("https://cdn.test/slow")
                assert exc_info.value.code == ErrorCode.SOURCE_FETCH_FAILED

    async def test_blank_body_raises_error(self) -> None:
        with respx.mock:
            respx.get("https://cdn.test/blank").mock(return_value=httpx.Response(200, text="  \n"))
            async with httpx.AsyncClient() as client:
                fetcher = Fetcher(client)
                with pytest.raises(CatalogError) as exc_info:
                    await fetcher.fetch("https://cdn.test/blank")
                assert exc_info.value.code == ErrorCode.SOURCE_EMPTY
                assert exc_info.value.recoverable is False
