# app/services/watchtime_ledger.py

import logging
from datetime import date, datetime
from typing import Optional, Union
from sqlalchemy.orm import Session
from sqlalchemy import and_, or_, select, func
from sqlalchemy.exc import SQLAlchemyError
from app.models.movie import MovieModel
from app.models.watch_entry import WatchEntryModel
from app.core.clock import day_bounds, to_naive_utc
from app.core.config import get_settings
from app.core.exceptions import LedgerQueryFailure
from app.database import get_db

logger = logging.getLogger(__name__)


class WatchtimeLedger:
    """사용자의 일일 시청 시간 집계"""

    def __init__(self, db: Optional[Session] = None, tz_name: Optional[str] = None):
        self.db: Session = db if db is not None else next(get_db())
        self.tz_name = tz_name or get_settings().day_timezone

    def get_daily_watchtime(
        self,
        user_id: int,
        reference_date: Union[date, datetime],
        before: Optional[datetime] = None,
        before_entry_id: Optional[int] = None,
    ) -> int:
        """
        기준 날짜에 생성된 기록들의 시청 시간 합계(분).

        영화 상영 시간이 있으면 그 값을, 없으면 기록에 저장된 시청 시간을 쓴다.
        before가 주어지면 그 시각 이전에 생성된 기록만 합산한다.
        before_entry_id를 함께 주면 생성 시각이 같은 기록은 ID가 더 작은 것만 앞선 기록으로 본다.
        조회에 실패하면 0으로 간주한다.
        """
        start_of_day, end_of_day = day_bounds(reference_date, self.tz_name)

        minutes = func.coalesce(
            func.nullif(MovieModel.runtime, 0), WatchEntryModel.watchtime_minutes
        )
        stmt = (
            select(func.coalesce(func.sum(minutes), 0))
            .select_from(WatchEntryModel)
            .outerjoin(MovieModel, WatchEntryModel.movie_id == MovieModel.movie_id)
            .where(
                WatchEntryModel.user_id == user_id,
                WatchEntryModel.created_at >= start_of_day,
                WatchEntryModel.created_at <= end_of_day,
            )
        )
        if before is not None:
            before = to_naive_utc(before)
            if before_entry_id is None:
                stmt = stmt.where(WatchEntryModel.created_at < before)
            else:
                stmt = stmt.where(
                    or_(
                        WatchEntryModel.created_at < before,
                        and_(
                            WatchEntryModel.created_at == before,
                            WatchEntryModel.entry_id < before_entry_id,
                        ),
                    )
                )

        try:
            total = self.db.execute(stmt).scalar_one()
            return int(total or 0)
        except SQLAlchemyError as e:
            self.db.rollback()
            failure = LedgerQueryFailure(f"일일 시청 시간 조회 실패: {str(e)}")
            logger.warning("user_id=%s %s", user_id, failure.message)
            return 0
