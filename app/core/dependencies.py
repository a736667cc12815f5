# app/core/dependencies.py

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from app.schemas.user import User
from app.services.user_service import UserService
from app.services.watch_entry_service import WatchEntryService
from app.services.unlock_sweep_service import UnlockSweepService
from app.core.auth import verify_token
from app.core.exceptions import NotAuthenticated
from app.database import get_db

security = HTTPBearer(auto_error=False)

def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(db)

def get_watch_entry_service(db: Session = Depends(get_db)) -> WatchEntryService:
    return WatchEntryService(db)

def get_unlock_sweep_service(db: Session = Depends(get_db)) -> UnlockSweepService:
    return UnlockSweepService(db)

async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    user_service: UserService = Depends(get_user_service)
) -> User:
    """현재 로그인한 사용자 조회"""
    if not credentials:
        raise NotAuthenticated("토큰이 필요합니다")

    user_id = verify_token(credentials.credentials)
    if user_id is None:
        raise NotAuthenticated("유효하지 않은 토큰입니다")

    user = user_service.get_user_by_id(user_id)
    if not user:
        raise NotAuthenticated("사용자를 찾을 수 없습니다")

    return user
