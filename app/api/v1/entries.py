# app/api/v1/entries.py

from typing import List
from fastapi import APIRouter, Depends, HTTPException, Path, status
from app.schemas.user import User
from app.schemas.watch_entry import (
    WatchEntryView,
    WatchEntryCreate,
    RatingUpdate,
    AddMovieResult,
    RatingResult,
    DeleteResult,
)
from app.services.watch_entry_service import WatchEntryService
from app.core.dependencies import get_current_user, get_watch_entry_service
from app.core.exceptions import PointsError

router = APIRouter()


@router.post(
    "",
    response_model=AddMovieResult,
    status_code=status.HTTP_201_CREATED,
    summary="시청 기록 추가",
    description="영화 시청 기록을 추가하고 포인트를 지급합니다. 트라이하드 모드에서는 평가 가능 시각 이후 정산됩니다.",
)
async def add_entry(
    payload: WatchEntryCreate,
    current_user: User = Depends(get_current_user),
    entry_service: WatchEntryService = Depends(get_watch_entry_service),
):
    try:
        return entry_service.add_movie(current_user.user_id, payload.movie_id, payload.rating)
    except PointsError:
        raise
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"시청 기록 추가 실패: {str(e)}",
        )


@router.get(
    "",
    response_model=List[WatchEntryView],
    summary="내 시청 기록 목록",
    description="최근 기록 순으로 시청 기록과 평가 가능 여부를 조회합니다.",
)
async def list_entries(
    current_user: User = Depends(get_current_user),
    entry_service: WatchEntryService = Depends(get_watch_entry_service),
):
    try:
        return entry_service.list_entries(current_user.user_id)
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"시청 기록 조회 실패: {str(e)}",
        )


@router.patch(
    "/{entry_id}/rating",
    response_model=RatingResult,
    summary="별점 수정",
    description="별점을 수정합니다. 트라이하드 모드 기록은 평가 가능 시각 이후에만 수정할 수 있습니다.",
)
async def update_rating(
    payload: RatingUpdate,
    entry_id: int = Path(description="시청 기록 ID"),
    current_user: User = Depends(get_current_user),
    entry_service: WatchEntryService = Depends(get_watch_entry_service),
):
    try:
        return entry_service.update_rating(current_user.user_id, entry_id, payload.rating)
    except PointsError:
        raise
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"별점 수정 실패: {str(e)}",
        )


@router.delete(
    "/{entry_id}",
    response_model=DeleteResult,
    summary="시청 기록 삭제",
    description="시청 기록을 삭제하고 해당 기록으로 얻은 포인트를 차감합니다.",
)
async def delete_entry(
    entry_id: int = Path(description="시청 기록 ID"),
    current_user: User = Depends(get_current_user),
    entry_service: WatchEntryService = Depends(get_watch_entry_service),
):
    try:
        return entry_service.delete_movie(current_user.user_id, entry_id)
    except PointsError:
        raise
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"시청 기록 삭제 실패: {str(e)}",
        )
