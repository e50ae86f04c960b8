# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-06
# Description: test_refresh_scheduler.py
# -----------------------------------------------------------------------------
import asyncio
from datetime import datetime

import pytest

from cache.RefreshScheduler import RefreshScheduler, next_run_after
from utility.errors import RefreshFailure, ReloadInProgress

SUNDAY = 6


@pytest.mark.parametrize(
    "now,expected",
    [
        # Wednesday -> following Sunday 03:00
        (datetime(2026, 2, 4, 12, 0), datetime(2026, 2, 8, 3, 0)),
        # Sunday before 03:00 -> same day
        (datetime(2026, 2, 8, 1, 30), datetime(2026, 2, 8, 3, 0)),
        # Sunday exactly 03:00 -> next week
        (datetime(2026, 2, 8, 3, 0), datetime(2026, 2, 15, 3, 0)),
        # Sunday after 03:00 -> next week
        (datetime(2026, 2, 8, 9, 15), datetime(2026, 2, 15, 3, 0)),
        # Saturday late -> a few hours later
        (datetime(2026, 2, 7, 23, 59), datetime(2026, 2, 8, 3, 0)),
    ],
)
def test_next_run_after_weekly(now, expected):
    assert next_run_after(now, weekday=SUNDAY, hour=3) == expected


def test_next_run_honours_minute():
    assert next_run_after(datetime(2026, 2, 2, 8, 0), weekday=0, hour=8, minute=30) == datetime(2026, 2, 2, 8, 30)


class _Coordinator:
    def __init__(self, error=None):
        self.error = error
        self.calls = 0

    def refresh(self):
        self.calls += 1
        if self.error:
            raise self.error
        return object()


def test_run_once_success():
    coordinator = _Coordinator()
    scheduler = RefreshScheduler(coordinator=coordinator)

    assert asyncio.run(scheduler.run_once()) is True
    assert coordinator.calls == 1
    assert scheduler.last_run is not None


@pytest.mark.parametrize("error", [RefreshFailure("productos"), ReloadInProgress("busy")])
def test_run_once_failure_does_not_raise(error):
    coordinator = _Coordinator(error=error)
    scheduler = RefreshScheduler(coordinator=coordinator)

    assert asyncio.run(scheduler.run_once()) is False
    assert coordinator.calls == 1


def test_loop_fires_refresh_and_stops_cleanly():
    coordinator = _Coordinator()
    # Clock pinned 10ms before the Sunday 03:00 slot
    scheduler = RefreshScheduler(
        coordinator=coordinator, clock=lambda: datetime(2026, 2, 8, 2, 59, 59, 990000)
    )

    async def scenario():
        await scheduler.start()
        for _ in range(200):
            if coordinator.calls:
                break
            await asyncio.sleep(0.01)
        await scheduler.stop()

    asyncio.run(scenario())
    assert coordinator.calls >= 1
    assert scheduler.task.done()
