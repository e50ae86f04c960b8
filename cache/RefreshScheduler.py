# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-04
# Description: RefreshScheduler.py
# -----------------------------------------------------------------------------
from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta
from typing import Callable, Optional

from cache.CacheCoordinator import CacheCoordinator
from utility.errors import RefreshFailure, ReloadInProgress
from utility.logging_utils import get_class_logger


def next_run_after(now: datetime, *, weekday: int, hour: int, minute: int = 0) -> datetime:
    """
    Next weekly occurrence of weekday (Monday=0) at hour:minute strictly after now.
    """
    candidate = now.replace(hour=hour, minute=minute, second=0, microsecond=0)
    candidate += timedelta(days=(weekday - now.weekday()) % 7)
    if candidate <= now:
        candidate += timedelta(days=7)
    return candidate


class RefreshScheduler:
    """
    Weekly cache refresh running as an asyncio task next to the API.

    The reload itself runs in a worker thread so searches keep being served.
    Failures are logged and the loop waits for the next slot.
    """

    def __init__(
        self,
        *,
        coordinator: CacheCoordinator,
        weekday: int = 6,
        hour: int = 3,
        minute: int = 0,
        clock: Callable[[], datetime] = datetime.now,
        logger: logging.Logger | None = None,
    ) -> None:
        self.coordinator = coordinator
        self.weekday = weekday
        self.hour = hour
        self.minute = minute
        self.clock = clock
        self.logger = logger or get_class_logger(self.__class__)
        self.task: Optional[asyncio.Task] = None
        self.last_run: Optional[datetime] = None

    def next_run(self) -> datetime:
        return next_run_after(
            self.clock(), weekday=self.weekday, hour=self.hour, minute=self.minute
        )

    async def start(self) -> None:
        if self.task is None or self.task.done():
            self.task = asyncio.create_task(self._loop())
            self.logger.info("Refresh scheduler started (next run %s)", self.next_run().isoformat())

    async def stop(self) -> None:
        if self.task and not self.task.done():
            self.task.cancel()
            try:
                await self.task
            except asyncio.CancelledError:
                pass
            self.logger.info("Refresh scheduler stopped")

    async def run_once(self) -> bool:
        """Run one refresh; True if a new snapshot was published."""
        self.logger.info("Scheduled weekly refresh started")
        self.last_run = self.clock()
        try:
            await asyncio.to_thread(self.coordinator.refresh)
        except (RefreshFailure, ReloadInProgress) as e:
            self.logger.error("Scheduled refresh did not publish: %s", e)
            return False
        self.logger.info("Scheduled weekly refresh completed")
        return True

    async def _loop(self) -> None:
        while True:
            delay = (self.next_run() - self.clock()).total_seconds()
            await asyncio.sleep(max(delay, 0.0))
            try:
                await self.run_once()
            except Exception as e:
                self.logger.exception("Refresh scheduler loop error: %s", e)
