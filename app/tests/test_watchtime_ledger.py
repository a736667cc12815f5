# app/tests/test_watchtime_ledger.py
import logging
from datetime import date, datetime, timedelta

import pytest
from sqlalchemy.exc import OperationalError

from app.models import WatchEntryModel
from app.services.watchtime_ledger import WatchtimeLedger


@pytest.fixture
def add_entry(db):
    def _add(user_id: int, movie_id: int, minutes: int, created_at: datetime) -> WatchEntryModel:
        entry = WatchEntryModel(
            user_id=user_id,
            movie_id=movie_id,
            watchtime_minutes=minutes,
            created_at=created_at,
            updated_at=created_at,
        )
        db.add(entry)
        db.commit()
        return entry

    return _add


def test_empty_day_is_zero(db, make_user, now):
    user = make_user()
    assert WatchtimeLedger(db).get_daily_watchtime(user.user_id, now) == 0


def test_sums_only_same_day_entries_of_user(db, make_user, make_movie, add_entry, now):
    user = make_user()
    other = make_user()
    make_movie(1, 90)
    make_movie(2, 150)
    make_movie(3, 60)

    add_entry(user.user_id, 1, 90, now.replace(hour=1))
    add_entry(user.user_id, 2, 150, now.replace(hour=20))
    add_entry(user.user_id, 3, 60, now - timedelta(days=1))
    add_entry(other.user_id, 1, 90, now)

    assert WatchtimeLedger(db).get_daily_watchtime(user.user_id, now) == 240
    assert WatchtimeLedger(db).get_daily_watchtime(user.user_id, date(2026, 10, 16)) == 60


def test_day_boundaries_are_inclusive(db, make_user, make_movie, add_entry, now):
    user = make_user()
    make_movie(1, 30)
    make_movie(2, 40)
    make_movie(3, 50)

    start = datetime(2026, 10, 17, 0, 0, 0)
    add_entry(user.user_id, 1, 30, start)
    add_entry(user.user_id, 2, 40, datetime(2026, 10, 17, 23, 59, 59, 999999))
    add_entry(user.user_id, 3, 50, start + timedelta(days=1))

    assert WatchtimeLedger(db).get_daily_watchtime(user.user_id, now) == 70


def test_prefers_current_movie_runtime(db, make_user, make_movie, add_entry, now):
    user = make_user()
    movie = make_movie(1, 100)
    add_entry(user.user_id, 1, 100, now)

    # 메타데이터 보정
    movie.runtime = 130
    db.commit()

    assert WatchtimeLedger(db).get_daily_watchtime(user.user_id, now) == 130


def test_falls_back_to_stored_minutes(db, make_user, make_movie, add_entry, now):
    user = make_user()
    make_movie(1, None)
    add_entry(user.user_id, 1, 95, now)
    # movies 행이 없는 기록
    add_entry(user.user_id, 999, 45, now)

    assert WatchtimeLedger(db).get_daily_watchtime(user.user_id, now) == 140


def test_before_limits_to_earlier_entries(db, make_user, make_movie, add_entry, now):
    user = make_user()
    make_movie(1, 90)
    make_movie(2, 120)
    first = add_entry(user.user_id, 1, 90, now)
    second = add_entry(user.user_id, 2, 120, now + timedelta(minutes=5))

    ledger = WatchtimeLedger(db)
    assert ledger.get_daily_watchtime(user.user_id, now, before=first.created_at) == 0
    assert ledger.get_daily_watchtime(user.user_id, now, before=second.created_at) == 90


def test_same_instant_entries_break_ties_by_id(db, make_user, make_movie, add_entry, now):
    user = make_user()
    make_movie(1, 90)
    make_movie(2, 120)
    first = add_entry(user.user_id, 1, 90, now)
    second = add_entry(user.user_id, 2, 120, now)

    ledger = WatchtimeLedger(db)
    assert ledger.get_daily_watchtime(user.user_id, now, before=now) == 0
    assert ledger.get_daily_watchtime(user.user_id, now, before=now, before_entry_id=first.entry_id) == 0
    assert ledger.get_daily_watchtime(user.user_id, now, before=now, before_entry_id=second.entry_id) == 90


def test_day_follows_configured_timezone(db, make_user, make_movie, add_entry, now):
    user = make_user()
    make_movie(1, 90)
    make_movie(2, 60)

    # 2026-10-17 01:00 KST
    add_entry(user.user_id, 1, 90, datetime(2026, 10, 16, 16, 0, 0))
    # 2026-10-16 23:00 KST
    add_entry(user.user_id, 2, 60, datetime(2026, 10, 16, 14, 0, 0))

    seoul = WatchtimeLedger(db, tz_name="Asia/Seoul")
    assert seoul.get_daily_watchtime(user.user_id, now) == 90
    assert WatchtimeLedger(db, tz_name="UTC").get_daily_watchtime(user.user_id, now) == 0


def test_query_failure_is_logged_and_treated_as_zero(db, make_user, monkeypatch, caplog, now):
    user = make_user()

    def broken_execute(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("database is locked"))

    monkeypatch.setattr(db, "execute", broken_execute)

    with caplog.at_level(logging.WARNING, logger="app.services.watchtime_ledger"):
        assert WatchtimeLedger(db).get_daily_watchtime(user.user_id, now) == 0

    assert "일일 시청 시간 조회 실패" in caplog.text
