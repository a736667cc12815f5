# app/services/unlock_sweep_service.py

import logging
from datetime import datetime
from typing import Optional
from sqlalchemy.orm import Session
from app.schemas.points import SweepResult
from app.schemas.watch_entry import WatchEntry
from app.services.entry_store import EntryStore
from app.services.watchtime_ledger import WatchtimeLedger
from app.services.user_service import UserService, apply_points
from app.services.points_calculator import calculate_points
from app.core.clock import utcnow, to_naive_utc
from app.database import get_db

logger = logging.getLogger(__name__)


class UnlockSweepService:
    """
    트라이하드 모드 기록의 시청 포인트 정산.

    평가 가능 시각이 지난 미정산 기록마다 생성일 기준 누적 시청 시간으로
    포인트를 다시 계산해 지급한다. 기록 갱신은 미정산 상태일 때만 적용되므로
    여러 세션에서 동시에 실행되어도 기록당 한 번만 지급된다.
    """

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

    def resolve_due_unlocks(self, user_id: Optional[int] = None, now: Optional[datetime] = None) -> SweepResult:
        now = to_naive_utc(now) if now else utcnow()

        due_entries = [
            WatchEntry.model_validate(e) for e in self.store.find_due_unlocks(user_id, now)
        ]
        result = SweepResult(checked=len(due_entries))

        for entry in due_entries:
            if entry.watchtime_points != 0:
                continue

            try:
                daily_before = self.ledger.get_daily_watchtime(
                    entry.user_id,
                    entry.created_at,
                    before=entry.created_at,
                    before_entry_id=entry.entry_id,
                )
                calculation = calculate_points(
                    daily_before, entry.watchtime_minutes, is_rated=False, try_hard_mode=True
                )

                if not self.store.award_watchtime_points(entry.entry_id, calculation.watchtime_points, now):
                    logger.debug("entry_id=%s 이미 정산됨", entry.entry_id)
                    continue

                apply_points(self.user_service, entry.user_id, calculation.watchtime_points, entry.entry_id)

                result.awarded += 1
                result.points_awarded += calculation.watchtime_points
                result.entry_ids.append(entry.entry_id)

            except Exception:
                logger.exception("entry_id=%s 정산 실패", entry.entry_id)
                continue

        if result.awarded:
            logger.info(
                "시청 포인트 정산 완료: %s건, %s포인트 (대상 %s건)",
                result.awarded,
                result.points_awarded,
                result.checked,
            )
        return result
