# app/schemas/points.py

from typing import List
from pydantic import BaseModel, Field


class PointsCalculation(BaseModel):
    """포인트 계산 결과"""

    watchtime_points: int = Field(description="시청 시간 포인트")
    rating_points: int = Field(description="평가 포인트")
    total_points: int = Field(description="합계 포인트")
    daily_watchtime_after: int = Field(description="이번 기록 포함 오늘 시청 시간(분), 상한 미적용")
    is_first_of_day: bool = Field(description="오늘 첫 기록 여부")
    can_earn_points: bool = Field(description="일일 상한(420분) 이내 여부")


class SweepResult(BaseModel):
    """트라이하드 모드 포인트 정산 결과"""

    checked: int = Field(default=0, description="정산 대상 기록 수")
    awarded: int = Field(default=0, description="포인트가 지급된 기록 수")
    points_awarded: int = Field(default=0, description="지급된 포인트 합계")
    entry_ids: List[int] = Field(default_factory=list, description="지급된 기록 ID")
