# app/core/config.py

from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """설정 클래스"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # 애플리케이션 설정
    app_name: str = Field(default="Watch Points API", description="애플리케이션 이름")
    debug: bool = Field(default=False, description="디버그 모드")
    log_level: str = Field(default="INFO", description="로그 레벨")
    cors_origins: list[str] = Field(default=["http://localhost:5173"], description="CORS 허용 origin")

    # 데이터베이스 설정
    database_url: str = Field(default="sqlite:///./watchpoints.db", description="DB 접속 URL")
    sql_echo: bool = Field(default=False, description="SQL 로그 출력")

    # JWT 인증 설정
    secret_key: str = Field(default="secret-jwt-key", description="JWT 토큰 암호화 키")
    algorithm: str = Field(default="HS256", description="JWT 알고리즘")
    access_token_expire_minutes: int = Field(default=60 * 24 * 30, description="JWT 토큰 만료 시간(분)")

    # 포인트 설정
    day_timezone: str = Field(default="UTC", description="일일 시청시간 집계 기준 타임존")
    unlock_sweep_interval_seconds: int = Field(
        default=30, ge=1, description="트라이하드 모드 포인트 정산 주기(초)"
    )
    enable_unlock_sweep_scheduler: bool = Field(default=True, description="정산 스케줄러 사용 여부")


@lru_cache()
def get_settings() -> Settings:
    return Settings()
