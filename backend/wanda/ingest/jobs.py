"""Background job that runs the inbound sync."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from wanda.domain.exceptions import DomainError
from wanda.ingest.service import InboundSyncService
from wanda.settings import settings

logger = logging.getLogger(__name__)


async def run(service: InboundSyncService) -> int:
    """Run a single sync sweep and return the number of posts created."""

    summary = await service.sync_all_sources()
    return summary.created


async def run_forever(service: InboundSyncService, *, interval_seconds: Optional[float] = None) -> None:
    """Sweep every ``interval_seconds`` until cancelled.

    The interval defaults to ``settings.sync_interval_seconds``; a failed
    sweep is logged and retried on the next tick.
    """

    interval = settings.sync_interval_seconds if interval_seconds is None else interval_seconds
    while True:
        try:
            created = await run(service)
            logger.debug("sync sweep complete", extra={"created_count": created})
        except DomainError as exc:
            logger.warning("sync sweep failed", extra={"kind": exc.code}, exc_info=exc)
        await asyncio.sleep(interval)
