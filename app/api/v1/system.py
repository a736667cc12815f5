# app/api/v1/system.py

import logging
from fastapi import APIRouter
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from app.core.config import get_settings
from app.database import engine

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check():
    """서비스 및 DB 상태 확인"""
    settings = get_settings()
    database = "ok"
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning("DB 상태 확인 실패: %s", e)
        database = "unavailable"

    return {
        "status": "healthy" if database == "ok" else "degraded",
        "service": settings.app_name,
        "database": database,
        "day_timezone": settings.day_timezone,
        "unlock_sweep_interval_seconds": settings.unlock_sweep_interval_seconds,
    }
