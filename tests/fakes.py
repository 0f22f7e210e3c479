"""In-memory stand-ins for the fetch and resolve layers."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field

from ringcatalog.errors import CatalogError, ErrorCode
from ringcatalog.models.catalog import SourceDescriptor


class FakeFetcher:
    """Stand-in for ``Fetcher``; records every URL it is asked for."""

    def __init__(self, responses: dict[str, str | BaseException] | None = None) -> None:
        self.responses: dict[str, str | BaseException] = dict(responses or {})
        self.calls: list[str] = []

    async def fetch(self, url: str, params: dict[str, str] | None = None) -> str:
        self.calls.append(url)
        await asyncio.sleep(0)
        result = self.responses.get(url)
        if result is None:
            raise CatalogError(ErrorCode.SOURCE_NOT_FOUND, f"HTTP 404 fetching {url}")
        if isinstance(result, BaseException):
            raise result
        return result


@dataclass
class FakeResolver:
    """Stand-in for ``ConfigurationResolver`` with an optional gate to hold a cycle open."""

    partitions: list[str]
    descriptors: list[SourceDescriptor] = field(default_factory=list)
    gate: asyncio.Event | None = None
    calls: int = 0

    async def resolve_all(self) -> list[SourceDescriptor]:
        self.calls += 1
        if self.gate is not None:
            await self.gate.wait()
        return list(self.descriptors)
