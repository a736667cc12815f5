# app/services/user_service.py

import logging
from typing import Optional
from sqlalchemy.orm import Session
from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from app.models.user import UserModel
from app.schemas.user import User
from app.core.exceptions import PointsMutationFailure, UserNotFound
from app.database import get_db

logger = logging.getLogger(__name__)


class UserService:

    def __init__(self, db: Optional[Session] = None):
        self.db: Session = db if db is not None else next(get_db())

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        """ID로 사용자 기본 정보 조회"""
        stmt = select(UserModel).where(UserModel.user_id == user_id)
        user_model = self.db.execute(stmt).scalar_one_or_none()

        return User.model_validate(user_model) if user_model else None

    def increment_user_points(self, user_id: int, delta: int) -> int:
        """포인트 증감 (단일 UPDATE로 처리). 변경 후 합계 반환"""
        try:
            stmt = (
                update(UserModel)
                .where(UserModel.user_id == user_id)
                .values(total_points=UserModel.total_points + delta)
                .returning(UserModel.total_points)
                .execution_options(synchronize_session=False)
            )
            new_total = self.db.execute(stmt).scalar_one_or_none()
            if new_total is None:
                raise UserNotFound(user_id)
            self.db.commit()
            return new_total

        except (SQLAlchemyError, UserNotFound) as e:
            self.db.rollback()
            raise PointsMutationFailure(f"포인트 반영 실패 (user_id={user_id}, delta={delta}): {str(e)}")

    def set_try_hard_mode(self, user_id: int, enabled: bool) -> User:
        """트라이하드 모드 설정"""
        try:
            user_model = self.db.execute(
                select(UserModel).where(UserModel.user_id == user_id)
            ).scalar_one_or_none()
            if not user_model:
                raise UserNotFound(user_id)

            user_model.try_hard_mode = enabled
            self.db.commit()
            self.db.refresh(user_model)

            return User.model_validate(user_model)

        except Exception:
            self.db.rollback()
            raise


def apply_points(user_service: UserService, user_id: int, delta: int, entry_id: Optional[int] = None) -> Optional[int]:
    """
    포인트 증감 반영.

    실패해도 이미 반영된 기록 변경은 되돌리지 않고 로그만 남긴다.
    성공하면 변경 후 합계, 실패하면 None 반환.
    """
    if delta == 0:
        return None
    try:
        return user_service.increment_user_points(user_id, delta)
    except PointsMutationFailure as e:
        logger.error("entry_id=%s %s", entry_id, e.message)
        return None
