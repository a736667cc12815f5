# app/schemas/__init__.py

from .movie import Movie
from .user import User, TryHardModeUpdate
from .points import PointsCalculation, SweepResult
from .watch_entry import (
    WatchEntry,
    WatchEntryView,
    WatchEntryCreate,
    RatingUpdate,
    AddMovieResult,
    RatingResult,
    DeleteResult,
    WatchStats,
    DailyWatchtimeSummary,
)

__all__ = [
    "Movie",
    "User",
    "TryHardModeUpdate",
    "PointsCalculation",
    "SweepResult",
    "WatchEntry",
    "WatchEntryView",
    "WatchEntryCreate",
    "RatingUpdate",
    "AddMovieResult",
    "RatingResult",
    "DeleteResult",
    "WatchStats",
    "DailyWatchtimeSummary",
]
