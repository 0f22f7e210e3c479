"""Unit tests for ringcatalog.refresh."""

from __future__ import annotations

import asyncio

from ringcatalog.models.status import LoadState
from ringcatalog.refresh import run_refresh_loop


class ScriptedLoader:
    """Returns scripted results from ``load_all`` and sets ``stop`` when exhausted."""

    def __init__(self, results: list[bool | Exception], stop: asyncio.Event) -> None:
        self._results = list(results)
        self._stop = stop
        self.calls = 0
        self.state = LoadState.IDLE

    async def load_all(self) -> bool:
        self.calls += 1
        result = self._results.pop(0)
        if not self._results:
            self._stop.set()
        if isinstance(result, Exception):
            raise result
        return result


async def test_loads_immediately_then_on_interval() -> None:
    stop = asyncio.Event()
    loader = ScriptedLoader([True, True, True], stop)

    loop = run_refresh_loop(loader, 0.01, stop)  # type: ignore[arg-type]
    await asyncio.wait_for(loop, timeout=5)

    assert loader.calls == 3


async def test_failed_cycles_keep_the_schedule() -> None:
    stop = asyncio.Event()
    loader = ScriptedLoader([False, RuntimeError("boom"), True], stop)

    loop = run_refresh_loop(loader, 0.01, stop)  # type: ignore[arg-type]
    await asyncio.wait_for(loop, timeout=5)

    assert loader.calls == 3


async def test_stop_interrupts_the_wait() -> None:
    stop = asyncio.Event()
    loader = ScriptedLoader([True, True], stop)

    task = asyncio.create_task(run_refresh_loop(loader, 3600, stop))  # type: ignore[arg-type]
    await asyncio.sleep(0.01)
    assert loader.calls == 1

    stop.set()
    await asyncio.wait_for(task, timeout=5)
    assert loader.calls == 1


async def test_already_stopped_loop_does_nothing() -> None:
    stop = asyncio.Event()
    stop.set()
    loader = ScriptedLoader([True], stop)

    await run_refresh_loop(loader, 0.01, stop)  # type: ignore[arg-type]

    assert loader.calls == 0
