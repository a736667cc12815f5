# app/tests/test_scheduler_service.py
import asyncio
import logging
from datetime import timedelta

import pytest

from app.core.clock import utcnow
from app.services.scheduler_service import SchedulerService
from app.services.watch_entry_service import WatchEntryService


@pytest.mark.asyncio
async def test_tick_resolves_due_entries(db, session_factory, make_user, make_movie, points_of):
    user = make_user(try_hard_mode=True)
    make_movie(1, 60)
    WatchEntryService(db).add_movie(user.user_id, 1, now=utcnow() - timedelta(hours=2))

    scheduler = SchedulerService(session_factory=session_factory, interval_seconds=30)
    result = await scheduler.tick()

    assert result.awarded == 1
    assert points_of(user.user_id) == 10

    again = await scheduler.tick()
    assert again.awarded == 0


@pytest.mark.asyncio
async def test_tick_logs_and_survives_errors(caplog):
    def broken_factory():
        raise RuntimeError("connection refused")

    scheduler = SchedulerService(session_factory=broken_factory, interval_seconds=30)

    with caplog.at_level(logging.ERROR, logger="app.services.scheduler_service"):
        assert await scheduler.tick() is None

    assert "포인트 정산 스케줄러 오류" in caplog.text


@pytest.mark.asyncio
async def test_run_scheduler_ticks_until_cancelled(session_factory, monkeypatch):
    scheduler = SchedulerService(session_factory=session_factory, interval_seconds=3600)
    ticked = asyncio.Event()

    async def fake_tick():
        ticked.set()

    monkeypatch.setattr(scheduler, "tick", fake_tick)

    task = asyncio.create_task(scheduler.run_scheduler())
    await asyncio.wait_for(ticked.wait(), timeout=1)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task


def test_interval_defaults_to_settings(session_factory):
    assert SchedulerService(session_factory=session_factory).interval_seconds == 30
