# app/services/entry_store.py

from datetime import datetime
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from app.models.movie import MovieModel
from app.models.watch_entry import WatchEntryModel
from app.schemas.watch_entry import WatchEntry
from app.core.clock import utcnow
from app.core.exceptions import DuplicateEntry, EntryNotFound
from app.database import get_db

# PostgreSQL은 제약 조건 이름, SQLite는 컬럼 목록으로 보고한다
UNIQUE_ENTRY_MARKERS = (
    "unique_user_movie",
    "watch_entries.user_id, watch_entries.movie_id",
)


def _is_duplicate_entry_error(error: IntegrityError) -> bool:
    message = str(error.orig)
    return any(marker in message for marker in UNIQUE_ENTRY_MARKERS)


class EntryStore:
    """시청 기록 저장소"""

    def __init__(self, db: Optional[Session] = None):
        self.db: Session = db if db is not None else next(get_db())

    def get_movie(self, movie_id: int) -> Optional[MovieModel]:
        stmt = select(MovieModel).where(MovieModel.movie_id == movie_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def get_entry(self, entry_id: int) -> Optional[WatchEntryModel]:
        stmt = select(WatchEntryModel).where(WatchEntryModel.entry_id == entry_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def find_user_entry(self, user_id: int, movie_id: int) -> Optional[WatchEntryModel]:
        stmt = select(WatchEntryModel).where(
            WatchEntryModel.user_id == user_id,
            WatchEntryModel.movie_id == movie_id,
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def list_user_entries(self, user_id: int) -> List[WatchEntryModel]:
        stmt = (
            select(WatchEntryModel)
            .where(WatchEntryModel.user_id == user_id)
            .order_by(WatchEntryModel.created_at.desc(), WatchEntryModel.entry_id.desc())
        )
        return list(self.db.execute(stmt).scalars().all())

    def create_entry(self, fields: Dict[str, Any]) -> WatchEntryModel:
        """기록 생성. (user_id, movie_id) 중복이면 DuplicateEntry"""
        entry = WatchEntryModel(**fields)
        try:
            self.db.add(entry)
            self.db.commit()
            self.db.refresh(entry)
            return entry
        except IntegrityError as e:
            self.db.rollback()
            if not _is_duplicate_entry_error(e):
                raise
            raise DuplicateEntry(fields.get("user_id"), fields.get("movie_id"))
        except Exception:
            self.db.rollback()
            raise

    def update_entry(self, entry_id: int, fields: Dict[str, Any]) -> None:
        values = dict(fields)
        values.setdefault("updated_at", utcnow())
        try:
            result = self.db.execute(
                update(WatchEntryModel)
                .where(WatchEntryModel.entry_id == entry_id)
                .values(**values)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                raise EntryNotFound(entry_id)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def award_watchtime_points(self, entry_id: int, points: int, awarded_at: datetime) -> bool:
        """아직 정산되지 않은 기록에만 시청 포인트 반영. 반영 여부 반환"""
        try:
            result = self.db.execute(
                update(WatchEntryModel)
                .where(
                    WatchEntryModel.entry_id == entry_id,
                    WatchEntryModel.watchtime_points == 0,
                    WatchEntryModel.watchtime_awarded_at.is_(None),
                )
                .values(
                    watchtime_points=points,
                    points_earned=WatchEntryModel.rating_points + points,
                    watchtime_awarded_at=awarded_at,
                    updated_at=awarded_at,
                )
                .execution_options(synchronize_session=False)
            )
            self.db.commit()
            return result.rowcount == 1
        except Exception:
            self.db.rollback()
            raise

    def award_rating_points(self, entry_id: int, points: int) -> bool:
        """평가 포인트가 없는 기록에만 반영. 반영 여부 반환"""
        try:
            result = self.db.execute(
                update(WatchEntryModel)
                .where(
                    WatchEntryModel.entry_id == entry_id,
                    WatchEntryModel.rating_points == 0,
                )
                .values(
                    rating_points=points,
                    points_earned=WatchEntryModel.watchtime_points + points,
                    updated_at=utcnow(),
                )
                .execution_options(synchronize_session=False)
            )
            self.db.commit()
            return result.rowcount == 1
        except Exception:
            self.db.rollback()
            raise

    def delete_entry(self, entry_id: int) -> WatchEntry:
        """기록 삭제 후 삭제된 기록의 포인트 정보 반환"""
        entry = self.get_entry(entry_id)
        if not entry:
            raise EntryNotFound(entry_id)

        deleted = WatchEntry.model_validate(entry)
        try:
            self.db.delete(entry)
            self.db.commit()
            return deleted
        except Exception:
            self.db.rollback()
            raise

    def find_due_unlocks(self, user_id: Optional[int] = None, now: Optional[datetime] = None) -> List[WatchEntryModel]:
        """평가 가능 시각이 지났는데 시청 포인트가 정산되지 않은 기록"""
        now = now or utcnow()
        stmt = select(WatchEntryModel).where(
            WatchEntryModel.can_rate_after.is_not(None),
            WatchEntryModel.can_rate_after <= now,
            WatchEntryModel.watchtime_points == 0,
            WatchEntryModel.watchtime_awarded_at.is_(None),
        )
        if user_id is not None:
            stmt = stmt.where(WatchEntryModel.user_id == user_id)
        stmt = stmt.order_by(WatchEntryModel.created_at, WatchEntryModel.entry_id)
        return list(self.db.execute(stmt).scalars().all())
