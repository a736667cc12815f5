# app/tests/test_unlock_clock.py
from datetime import datetime, timedelta, timezone

import pytest

from app.services.unlock_clock import (
    can_rate_now,
    compute_unlock_time,
    format_wait,
    seconds_until_can_rate,
)


@pytest.mark.parametrize(
    "runtime, wait_minutes",
    [(5, 10), (20, 10), (21, 11), (90, 80), (200, 190)],
)
def test_compute_unlock_time(now, runtime, wait_minutes):
    assert compute_unlock_time(runtime, now) == now + timedelta(minutes=wait_minutes)


def test_compute_unlock_time_accepts_aware_now(now):
    aware = now.replace(tzinfo=timezone.utc)
    assert compute_unlock_time(90, aware) == now + timedelta(minutes=80)


def test_compute_unlock_time_defaults_to_current_time():
    before = datetime.now(timezone.utc).replace(tzinfo=None)
    unlock = compute_unlock_time(200)
    assert before + timedelta(minutes=190) <= unlock <= before + timedelta(minutes=191)


def test_can_rate_now(now):
    assert can_rate_now(None) is True
    assert can_rate_now(None, now) is True
    assert can_rate_now(now + timedelta(seconds=1), now) is False
    assert can_rate_now(now - timedelta(minutes=5), now) is True
    assert can_rate_now(now, now) is True


def test_can_rate_now_against_wall_clock():
    utc_now = datetime.now(timezone.utc).replace(tzinfo=None)
    assert can_rate_now(utc_now + timedelta(hours=1)) is False
    assert can_rate_now(utc_now - timedelta(hours=1)) is True


def test_seconds_until_can_rate(now):
    assert seconds_until_can_rate(None, now) == 0
    assert seconds_until_can_rate(now - timedelta(minutes=1), now) == 0
    assert seconds_until_can_rate(now + timedelta(minutes=65), now) == 3900


@pytest.mark.parametrize(
    "seconds, label",
    [(0, "0m"), (59, "0m"), (720, "12m"), (3600, "1h 0m"), (3900, "1h 5m"), (11400, "3h 10m")],
)
def test_format_wait(seconds, label):
    assert format_wait(seconds) == label
