# app/services/scheduler_service.py

import asyncio
import logging
from typing import Callable, Optional
from sqlalchemy.orm import Session
from app.core.config import get_settings
from app.database import SessionLocal
from app.schemas.points import SweepResult
from app.services.unlock_sweep_service import UnlockSweepService

logger = logging.getLogger(__name__)


class SchedulerService:

    def __init__(
        self,
        session_factory: Callable[[], Session] = SessionLocal,
        interval_seconds: Optional[int] = None,
    ):
        self.session_factory = session_factory
        self.interval_seconds = interval_seconds or get_settings().unlock_sweep_interval_seconds

    def run_unlock_sweep(self) -> SweepResult:
        """전체 사용자 트라이하드 모드 포인트 정산"""
        db = self.session_factory()
        try:
            return UnlockSweepService(db).resolve_due_unlocks()
        finally:
            db.close()

    async def tick(self) -> Optional[SweepResult]:
        try:
            return await asyncio.to_thread(self.run_unlock_sweep)
        except Exception:
            logger.exception("포인트 정산 스케줄러 오류")
            return None

    async def run_scheduler(self):
        """스케줄러 실행"""
        logger.info("포인트 정산 스케줄러 시작 (주기 %s초)", self.interval_seconds)
        while True:
            await self.tick()
            await asyncio.sleep(self.interval_seconds)
