# app/schemas/user.py

from typing import Optional
from pydantic import BaseModel, Field
from datetime import datetime


class User(BaseModel):
    user_id: int = Field(description="사용자 ID")
    email: str = Field(description="이메일")
    name: str = Field(description="사용자 이름")
    total_points: int = Field(default=0, description="보유 포인트")
    try_hard_mode: bool = Field(default=False, description="트라이하드 모드")
    created_at: Optional[datetime] = Field(default=None, description="생성일시")
    updated_at: Optional[datetime] = Field(default=None, description="수정일시")

    class Config:
        from_attributes = True


class TryHardModeUpdate(BaseModel):
    enabled: bool = Field(description="트라이하드 모드 사용 여부")
