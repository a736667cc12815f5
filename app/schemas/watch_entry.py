# app/schemas/watch_entry.py

from typing import Optional
from pydantic import BaseModel, Field
from datetime import datetime
from app.schemas.movie import Movie
from app.schemas.points import PointsCalculation


class WatchEntry(BaseModel):
    entry_id: int = Field(description="시청 기록 ID")
    user_id: int = Field(description="사용자 ID")
    movie_id: int = Field(description="영화 ID")
    watchtime_minutes: int = Field(description="시청 시간(분)")
    rating: Optional[int] = Field(default=None, description="별점", ge=1, le=5)
    created_at: datetime = Field(description="생성일시")
    updated_at: Optional[datetime] = Field(default=None, description="수정일시")
    can_rate_after: Optional[datetime] = Field(default=None, description="평가 가능 시각")
    watchtime_awarded_at: Optional[datetime] = Field(default=None, description="시청 포인트 정산 시각")
    points_earned: int = Field(default=0, description="획득 포인트")
    watchtime_points: int = Field(default=0, description="시청 시간 포인트")
    rating_points: int = Field(default=0, description="평가 포인트")

    class Config:
        from_attributes = True


class WatchEntryView(WatchEntry):
    """목록 조회용 기록 (평가 가능 여부 포함)"""

    movie: Optional[Movie] = Field(default=None, description="영화 정보")
    can_rate: bool = Field(default=True, description="현재 평가 가능 여부")
    rate_wait_seconds: int = Field(default=0, description="평가 가능까지 남은 시간(초)")
    rate_wait_label: Optional[str] = Field(default=None, description="평가 가능까지 남은 시간")


class WatchEntryCreate(BaseModel):
    movie_id: int = Field(description="영화 ID")
    rating: Optional[int] = Field(default=None, description="별점", ge=1, le=5)


class RatingUpdate(BaseModel):
    rating: int = Field(description="별점", ge=1, le=5)


class AddMovieResult(BaseModel):
    entry: Optional[WatchEntry] = Field(default=None, description="생성된 기록")
    calculation: Optional[PointsCalculation] = Field(default=None, description="포인트 계산 결과")
    points_earned: int = Field(default=0, description="이번에 지급된 포인트")
    points_pending: bool = Field(default=False, description="트라이하드 모드 정산 대기 여부")
    duplicate: bool = Field(default=False, description="이미 기록된 영화 여부")
    reason: Optional[str] = Field(default=None, description="사유 코드")


class RatingResult(BaseModel):
    entry: WatchEntry = Field(description="수정된 기록")
    rating_points: int = Field(default=0, description="이번에 지급된 평가 포인트")


class DeleteResult(BaseModel):
    entry_id: int = Field(description="삭제된 기록 ID")
    points_deducted: int = Field(default=0, description="차감된 포인트")


class WatchStats(BaseModel):
    movie_count: int = Field(default=0, description="기록한 영화 수")
    total_watchtime_minutes: int = Field(default=0, description="총 시청 시간(분)")
    average_rating: float = Field(default=0.0, description="평균 별점")
    total_points: int = Field(default=0, description="보유 포인트")


class DailyWatchtimeSummary(BaseModel):
    watchtime_minutes: int = Field(description="오늘 시청 시간(분)")
    cap_minutes: int = Field(description="일일 상한(분)")
    remaining_minutes: int = Field(description="상한까지 남은 시간(분)")
