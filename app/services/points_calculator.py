# app/services/points_calculator.py

"""
시청 기록 포인트 계산

일반 모드는 상영 시간 구간별 포인트와 평가 포인트를 그대로 지급한다.
트라이하드 모드는 하루 첫 기록에만 평가 포인트를 주고, 이후 기록은
오늘 누적 시청 시간에 비례해 시청 포인트를 줄이며(최소 10%),
일일 상한(420분)을 넘는 부분은 비율만큼 차감한다.
"""

import math
from app.schemas.points import PointsCalculation

DAILY_WATCHTIME_CAP_MINUTES = 420
RATING_POINTS = 5
MIN_REDUCTION_FACTOR = 0.1

# (상영 시간 상한, 포인트), 상한 포함
WATCHTIME_TIERS = (
    (60, 10),
    (120, 20),
    (180, 30),
)
MAX_TIER_POINTS = 40


def watchtime_tier_points(runtime: int) -> int:
    """상영 시간 구간별 기본 시청 포인트"""
    for limit, points in WATCHTIME_TIERS:
        if runtime <= limit:
            return points
    return MAX_TIER_POINTS


def reduction_factor(daily_watchtime_before: int) -> float:
    """오늘 이미 시청한 시간에 따른 감소 비율 (0.1 ~ 1.0)"""
    factor = 1 - daily_watchtime_before / DAILY_WATCHTIME_CAP_MINUTES
    return min(1.0, max(MIN_REDUCTION_FACTOR, factor))


def calculate_points(
    daily_watchtime_before: int,
    runtime: int,
    is_rated: bool = True,
    try_hard_mode: bool = False,
) -> PointsCalculation:
    if daily_watchtime_before < 0:
        raise ValueError(f"daily_watchtime_before must be >= 0, got {daily_watchtime_before}")
    if runtime <= 0:
        raise ValueError(f"runtime must be > 0, got {runtime}")

    base_points = watchtime_tier_points(runtime)
    daily_watchtime_after = daily_watchtime_before + runtime

    if not try_hard_mode:
        rating_points = RATING_POINTS if is_rated else 0
        return PointsCalculation(
            watchtime_points=base_points,
            rating_points=rating_points,
            total_points=base_points + rating_points,
            daily_watchtime_after=daily_watchtime_after,
            is_first_of_day=True,
            can_earn_points=True,
        )

    is_first_of_day = daily_watchtime_before == 0

    if is_first_of_day:
        watchtime_points = base_points
        rating_points = RATING_POINTS if is_rated else 0
    else:
        watchtime_points = math.floor(base_points * reduction_factor(daily_watchtime_before))
        rating_points = 0

    # 상한을 넘은 시간만큼 비율 차감
    if daily_watchtime_after > DAILY_WATCHTIME_CAP_MINUTES:
        excess_minutes = daily_watchtime_after - DAILY_WATCHTIME_CAP_MINUTES
        valid_ratio = max(0.0, (runtime - excess_minutes) / runtime)
        watchtime_points = math.floor(watchtime_points * valid_ratio)
        rating_points = math.floor(rating_points * valid_ratio)

    return PointsCalculation(
        watchtime_points=watchtime_points,
        rating_points=rating_points,
        total_points=watchtime_points + rating_points,
        daily_watchtime_after=daily_watchtime_after,
        is_first_of_day=is_first_of_day,
        can_earn_points=daily_watchtime_after <= DAILY_WATCHTIME_CAP_MINUTES,
    )
