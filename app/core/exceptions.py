# app/core/exceptions.py

from typing import Optional


class PointsError(Exception):
    """포인트 도메인 오류의 기본 클래스"""

    reason_code: str = "points_error"

    def __init__(self, message: str, reason_code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if reason_code:
            self.reason_code = reason_code


class NotAuthenticated(PointsError):
    reason_code = "not_authenticated"

    def __init__(self, message: str = "로그인이 필요합니다"):
        super().__init__(message)


class DuplicateEntry(PointsError):
    reason_code = "duplicate_entry"

    def __init__(self, user_id: int, movie_id: int):
        super().__init__("이미 기록된 영화입니다")
        self.user_id = user_id
        self.movie_id = movie_id


class RatingTooEarly(PointsError):
    """트라이하드 모드 잠금 해제 전 평가 시도"""

    reason_code = "rating_too_early"

    def __init__(self, remaining_seconds: int, wait_label: str):
        super().__init__(f"아직 평가할 수 없습니다. {wait_label} 후에 평가할 수 있습니다")
        self.remaining_seconds = remaining_seconds
        self.wait_label = wait_label


class EntryNotFound(PointsError):
    reason_code = "entry_not_found"

    def __init__(self, entry_id: int):
        super().__init__(f"시청 기록을 찾을 수 없습니다 (ID: {entry_id})")
        self.entry_id = entry_id


class MovieNotFound(PointsError):
    reason_code = "movie_not_found"

    def __init__(self, movie_id: int):
        super().__init__(f"영화를 찾을 수 없습니다 (ID: {movie_id})")
        self.movie_id = movie_id


class UserNotFound(PointsError):
    reason_code = "user_not_found"

    def __init__(self, user_id: int):
        super().__init__(f"사용자를 찾을 수 없습니다 (ID: {user_id})")
        self.user_id = user_id


class LedgerQueryFailure(PointsError):
    reason_code = "ledger_query_failure"


class PointsMutationFailure(PointsError):
    reason_code = "points_mutation_failure"


class InvalidRating(PointsError):
    reason_code = "invalid_rating"

    def __init__(self, rating):
        super().__init__(f"별점은 1~5 사이여야 합니다 (입력: {rating})")
        self.rating = rating
