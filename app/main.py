# app/main.py

import asyncio
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.core.config import get_settings
from app.core.exceptions import (
    PointsError,
    NotAuthenticated,
    DuplicateEntry,
    RatingTooEarly,
    InvalidRating,
    EntryNotFound,
    MovieNotFound,
    UserNotFound,
    PointsMutationFailure,
)
from app.api.v1 import api_router
from app.database import engine, Base
from app import models  # noqa: F401
from app.services.scheduler_service import SchedulerService

# 설정 로드
settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# 스케줄러 전역 변수
scheduler_task = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    # 시작 시
    global scheduler_task
    Base.metadata.create_all(bind=engine)
    if settings.enable_unlock_sweep_scheduler:
        scheduler_service = SchedulerService()
        scheduler_task = asyncio.create_task(scheduler_service.run_scheduler())

    yield

    # 종료 시
    if scheduler_task:
        scheduler_task.cancel()
        try:
            await scheduler_task
        except asyncio.CancelledError:
            pass
        scheduler_task = None
    logger.info("포인트 정산 스케줄러 종료됨")


# FastAPI 앱 생성
app = FastAPI(
    title=settings.app_name,
    description="Movie watch points service",
    version="1.0.0",
    docs_url="/docs",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

ERROR_STATUS_CODES = {
    NotAuthenticated: 401,
    EntryNotFound: 404,
    MovieNotFound: 404,
    UserNotFound: 404,
    DuplicateEntry: 409,
    RatingTooEarly: 409,
    InvalidRating: 422,
    PointsMutationFailure: 500,
}


@app.exception_handler(PointsError)
async def points_error_handler(request: Request, exc: PointsError):
    status_code = ERROR_STATUS_CODES.get(type(exc), 400)
    content = {"detail": exc.message, "reason": exc.reason_code}
    if isinstance(exc, RatingTooEarly):
        content["remaining_seconds"] = exc.remaining_seconds
    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
    return JSONResponse(status_code=status_code, content=content, headers=headers)


# CORS 미들웨어
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API v1 라우터 등록
app.include_router(api_router, prefix="/v1")


@app.get("/")
def read_root():
    """서비스 루트"""
    return {
        "service": settings.app_name,
        "version": "1.0.0",
        "docs": "/docs",
    }
