# app/api/v1/users.py

from fastapi import APIRouter, Depends, HTTPException, status
from app.schemas.user import User, TryHardModeUpdate
from app.schemas.points import SweepResult
from app.schemas.watch_entry import WatchStats, DailyWatchtimeSummary
from app.services.user_service import UserService
from app.services.watch_entry_service import WatchEntryService
from app.services.unlock_sweep_service import UnlockSweepService
from app.core.dependencies import (
    get_current_user,
    get_user_service,
    get_watch_entry_service,
    get_unlock_sweep_service,
)
from app.core.exceptions import PointsError

router = APIRouter()


@router.get(
    "/me",
    response_model=User,
    summary="내 정보 조회",
    description="보유 포인트와 트라이하드 모드 설정을 포함한 내 정보를 조회합니다.",
)
async def get_me(current_user: User = Depends(get_current_user)):
    return current_user


@router.put(
    "/me/try-hard-mode",
    response_model=User,
    summary="트라이하드 모드 설정",
    description="트라이하드 모드를 켜거나 끕니다. 이후 추가하는 기록부터 적용됩니다.",
)
async def set_try_hard_mode(
    payload: TryHardModeUpdate,
    current_user: User = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
):
    try:
        return user_service.set_try_hard_mode(current_user.user_id, payload.enabled)
    except PointsError:
        raise
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"트라이하드 모드 설정 실패: {str(e)}",
        )


@router.get(
    "/me/stats",
    response_model=WatchStats,
    summary="내 시청 통계",
    description="기록한 영화 수, 총 시청 시간, 평균 별점, 보유 포인트를 조회합니다.",
)
async def get_my_stats(
    current_user: User = Depends(get_current_user),
    entry_service: WatchEntryService = Depends(get_watch_entry_service),
):
    return entry_service.get_stats(current_user.user_id)


@router.get(
    "/me/watchtime/today",
    response_model=DailyWatchtimeSummary,
    summary="오늘 시청 시간",
    description="오늘 누적 시청 시간과 일일 상한까지 남은 시간을 조회합니다.",
)
async def get_today_watchtime(
    current_user: User = Depends(get_current_user),
    entry_service: WatchEntryService = Depends(get_watch_entry_service),
):
    return entry_service.get_today_summary(current_user.user_id)


@router.post(
    "/me/unlocks/resolve",
    response_model=SweepResult,
    summary="트라이하드 모드 포인트 정산",
    description="평가 가능 시각이 지난 내 기록의 시청 포인트를 정산합니다. 로그인 직후 호출합니다.",
)
async def resolve_my_unlocks(
    current_user: User = Depends(get_current_user),
    sweep_service: UnlockSweepService = Depends(get_unlock_sweep_service),
):
    try:
        return sweep_service.resolve_due_unlocks(current_user.user_id)
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"포인트 정산 실패: {str(e)}",
        )
