"""Periodic catalog reload."""

from __future__ import annotations

import asyncio
import contextlib
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from ringcatalog.loader import CatalogLoader

log = structlog.get_logger()


async def run_refresh_loop(
    loader: CatalogLoader,
    interval_seconds: float,
    stop: asyncio.Event,
) -> None:
    """Load the catalog now, then again every ``interval_seconds`` until ``stop`` is set.

    A failed or rejected cycle is logged and the loop keeps its schedule.
    """
    log.info("refresh_loop_started", interval_seconds=interval_seconds)
    while not stop.is_set():
        try:
            completed = await loader.load_all()
        except Exception:
            # load_all contains its own failures; this only guards the schedule
            log.error("refresh_cycle_error", exc_info=True)
        else:
            if not completed:
                log.warning("refresh_cycle_incomplete", state=str(loader.state))

        with contextlib.suppress(TimeoutError):
            await asyncio.wait_for(stop.wait(), timeout=interval_seconds)
    log.info("refresh_loop_stopped")
