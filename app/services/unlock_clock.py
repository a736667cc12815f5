# app/services/unlock_clock.py

import math
from datetime import datetime, timedelta
from typing import Optional
from app.core.clock import utcnow, to_naive_utc

UNLOCK_GRACE_MINUTES = 10
MIN_UNLOCK_MINUTES = 10


def compute_unlock_time(runtime_minutes: int, now: Optional[datetime] = None) -> datetime:
    """트라이하드 모드 평가 가능 시각 (상영 시간 - 10분, 최소 10분)"""
    now = to_naive_utc(now) if now else utcnow()
    wait_minutes = max(MIN_UNLOCK_MINUTES, runtime_minutes - UNLOCK_GRACE_MINUTES)
    return now + timedelta(minutes=wait_minutes)


def can_rate_now(can_rate_after: Optional[datetime], now: Optional[datetime] = None) -> bool:
    if can_rate_after is None:
        return True
    now = to_naive_utc(now) if now else utcnow()
    return now >= to_naive_utc(can_rate_after)


def seconds_until_can_rate(can_rate_after: Optional[datetime], now: Optional[datetime] = None) -> int:
    if can_rate_after is None:
        return 0
    now = to_naive_utc(now) if now else utcnow()
    remaining = (to_naive_utc(can_rate_after) - now).total_seconds()
    return max(0, math.ceil(remaining))


def format_wait(seconds: int) -> str:
    """남은 시간 표시 (예: 1h 5m, 12m)"""
    hours, rest = divmod(max(0, seconds), 3600)
    minutes = rest // 60
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"
