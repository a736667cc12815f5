# app/core/clock.py

from datetime import date, datetime, time, timezone
from typing import Tuple, Union
from zoneinfo import ZoneInfo

# DB 타임스탬프는 모두 timezone 정보 없는 UTC로 저장


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def local_date(reference: Union[date, datetime], tz_name: str) -> date:
    """기준 시각이 속한 타임존 기준 날짜"""
    if isinstance(reference, datetime):
        aware = reference if reference.tzinfo else reference.replace(tzinfo=timezone.utc)
        return aware.astimezone(ZoneInfo(tz_name)).date()
    return reference


def day_bounds(reference: Union[date, datetime], tz_name: str) -> Tuple[datetime, datetime]:
    """해당 날짜의 시작/끝 시각 (UTC, 양 끝 포함)"""
    tz = ZoneInfo(tz_name)
    day = local_date(reference, tz_name)
    start = datetime.combine(day, time.min, tzinfo=tz)
    end = datetime.combine(day, time.max, tzinfo=tz)
    return to_naive_utc(start), to_naive_utc(end)
