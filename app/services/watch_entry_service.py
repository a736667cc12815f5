# app/services/watch_entry_service.py

import logging
from datetime import datetime
from typing import List, Optional
from sqlalchemy.orm import Session
from app.schemas.movie import Movie
from app.schemas.watch_entry import (
    WatchEntry,
    WatchEntryView,
    AddMovieResult,
    RatingResult,
    DeleteResult,
    WatchStats,
    DailyWatchtimeSummary,
)
from app.services.entry_store import EntryStore
from app.services.watchtime_ledger import WatchtimeLedger
from app.services.user_service import UserService, apply_points
from app.services.points_calculator import (
    DAILY_WATCHTIME_CAP_MINUTES,
    RATING_POINTS,
    calculate_points,
)
from app.services.unlock_clock import (
    compute_unlock_time,
    can_rate_now,
    seconds_until_can_rate,
    format_wait,
)
from app.core.clock import utcnow, to_naive_utc
from app.core.exceptions import (
    DuplicateEntry,
    EntryNotFound,
    InvalidRating,
    MovieNotFound,
    RatingTooEarly,
    UserNotFound,
)
from app.database import get_db

logger = logging.getLogger(__name__)

# 영화 상영 시간 정보가 없을 때 사용
DEFAULT_RUNTIME_MINUTES = 120

MIN_RATING = 1
MAX_RATING = 5


def _validate_rating(rating: Optional[int]) -> None:
    if rating is not None and not MIN_RATING <= rating <= MAX_RATING:
        raise InvalidRating(rating)


class WatchEntryService:

    def __init__(
        self,
        db: Optional[Session] = None,
        store: Optional[EntryStore] = None,
        ledger: Optional[WatchtimeLedger] = None,
        user_service: Optional[UserService] = None,
    ):
        if db is None and None in (store, ledger, user_service):
            db = next(get_db())
        self.store = store or EntryStore(db)
        self.ledger = ledger or WatchtimeLedger(db)
        self.user_service = user_service or UserService(db)

    def add_movie(
        self,
        user_id: int,
        movie_id: int,
        rating: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> AddMovieResult:
        """영화 시청 기록 추가 및 포인트 지급"""
        now = to_naive_utc(now) if now else utcnow()
        _validate_rating(rating)

        user = self.user_service.get_user_by_id(user_id)
        if not user:
            raise UserNotFound(user_id)

        movie = self.store.get_movie(movie_id)
        if not movie:
            raise MovieNotFound(movie_id)

        # 이미 기록된 영화는 모드와 관계없이 포인트 없이 종료
        if self.store.find_user_entry(user_id, movie_id):
            logger.info("user_id=%s movie_id=%s 중복 기록 - 포인트 미지급", user_id, movie_id)
            return AddMovieResult(duplicate=True, reason=DuplicateEntry.reason_code)

        runtime = movie.runtime or DEFAULT_RUNTIME_MINUTES
        daily_before = self.ledger.get_daily_watchtime(user_id, now)

        fields = {
            "user_id": user_id,
            "movie_id": movie_id,
            "watchtime_minutes": runtime,
            "created_at": now,
            "updated_at": now,
        }

        if user.try_hard_mode:
            can_rate_after = compute_unlock_time(runtime, now)
            if rating is not None:
                remaining = seconds_until_can_rate(can_rate_after, now)
                raise RatingTooEarly(remaining, format_wait(remaining))

            # 포인트는 정산 시점에 지급
            calculation = calculate_points(daily_before, runtime, is_rated=False, try_hard_mode=True)
            fields["can_rate_after"] = can_rate_after
        else:
            calculation = calculate_points(daily_before, runtime, is_rated=rating is not None)
            fields.update(
                rating=rating,
                watchtime_points=calculation.watchtime_points,
                rating_points=calculation.rating_points,
                points_earned=calculation.total_points,
                watchtime_awarded_at=now,
            )

        try:
            entry_model = self.store.create_entry(fields)
        except DuplicateEntry as e:
            logger.info("user_id=%s movie_id=%s 중복 기록 - 포인트 미지급", user_id, movie_id)
            return AddMovieResult(duplicate=True, reason=e.reason_code)

        entry = WatchEntry.model_validate(entry_model)
        apply_points(self.user_service, user_id, entry.points_earned, entry.entry_id)

        logger.info(
            "user_id=%s movie_id=%s 기록 추가 - %s포인트 (오늘 %s분, 정산대기=%s)",
            user_id,
            movie_id,
            entry.points_earned,
            calculation.daily_watchtime_after,
            user.try_hard_mode,
        )

        return AddMovieResult(
            entry=entry,
            calculation=calculation,
            points_earned=entry.points_earned,
            points_pending=user.try_hard_mode,
        )

    def update_rating(
        self,
        user_id: int,
        entry_id: int,
        rating: int,
        now: Optional[datetime] = None,
    ) -> RatingResult:
        """별점 수정. 자격이 있는 기록이면 평가 포인트 1회 지급"""
        now = to_naive_utc(now) if now else utcnow()
        _validate_rating(rating)

        entry = self._get_owned_entry(user_id, entry_id)

        if not can_rate_now(entry.can_rate_after, now):
            remaining = seconds_until_can_rate(entry.can_rate_after, now)
            raise RatingTooEarly(remaining, format_wait(remaining))

        self.store.update_entry(entry_id, {"rating": rating, "updated_at": now})

        rating_points = 0
        if entry.rating_points == 0:
            rating_points = self._qualifying_rating_points(entry)
            if rating_points and self.store.award_rating_points(entry_id, rating_points):
                apply_points(self.user_service, user_id, rating_points, entry_id)
            else:
                rating_points = 0

        updated = WatchEntry.model_validate(self.store.get_entry(entry_id))
        return RatingResult(entry=updated, rating_points=rating_points)

    def delete_movie(self, user_id: int, entry_id: int) -> DeleteResult:
        """기록 삭제 및 해당 기록으로 얻은 포인트 차감"""
        self._get_owned_entry(user_id, entry_id)

        deleted = self.store.delete_entry(entry_id)
        apply_points(self.user_service, user_id, -deleted.points_earned, entry_id)

        logger.info("user_id=%s entry_id=%s 기록 삭제 - %s포인트 차감", user_id, entry_id, deleted.points_earned)
        return DeleteResult(entry_id=entry_id, points_deducted=deleted.points_earned)

    def list_entries(self, user_id: int, now: Optional[datetime] = None) -> List[WatchEntryView]:
        now = to_naive_utc(now) if now else utcnow()

        views = []
        for entry_model in self.store.list_user_entries(user_id):
            wait_seconds = seconds_until_can_rate(entry_model.can_rate_after, now)
            views.append(
                WatchEntryView(
                    **WatchEntry.model_validate(entry_model).model_dump(),
                    movie=Movie.model_validate(entry_model.movie) if entry_model.movie else None,
                    can_rate=can_rate_now(entry_model.can_rate_after, now),
                    rate_wait_seconds=wait_seconds,
                    rate_wait_label=format_wait(wait_seconds) if wait_seconds else None,
                )
            )
        return views

    def get_stats(self, user_id: int) -> WatchStats:
        user = self.user_service.get_user_by_id(user_id)
        if not user:
            raise UserNotFound(user_id)

        entries = self.store.list_user_entries(user_id)
        ratings = [e.rating for e in entries if e.rating is not None]

        return WatchStats(
            movie_count=len(entries),
            total_watchtime_minutes=sum(e.watchtime_minutes for e in entries),
            average_rating=round(sum(ratings) / len(ratings), 1) if ratings else 0.0,
            total_points=user.total_points,
        )

    def get_today_summary(self, user_id: int, now: Optional[datetime] = None) -> DailyWatchtimeSummary:
        now = to_naive_utc(now) if now else utcnow()
        minutes = self.ledger.get_daily_watchtime(user_id, now)
        return DailyWatchtimeSummary(
            watchtime_minutes=minutes,
            cap_minutes=DAILY_WATCHTIME_CAP_MINUTES,
            remaining_minutes=max(0, DAILY_WATCHTIME_CAP_MINUTES - minutes),
        )

    def _get_owned_entry(self, user_id: int, entry_id: int) -> WatchEntry:
        entry_model = self.store.get_entry(entry_id)
        if not entry_model or entry_model.user_id != user_id:
            raise EntryNotFound(entry_id)
        return WatchEntry.model_validate(entry_model)

    def _qualifying_rating_points(self, entry: WatchEntry) -> int:
        # 일반 모드 기록은 항상 평가 포인트 대상
        if entry.can_rate_after is None:
            return RATING_POINTS

        daily_before = self.ledger.get_daily_watchtime(
            entry.user_id,
            entry.created_at,
            before=entry.created_at,
            before_entry_id=entry.entry_id,
        )
        calculation = calculate_points(
            daily_before, entry.watchtime_minutes, is_rated=True, try_hard_mode=True
        )
        return calculation.rating_points
