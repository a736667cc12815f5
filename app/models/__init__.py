# app/models/__init__.py

from .movie import MovieModel
from .user import UserModel
from .watch_entry import WatchEntryModel


__all__ = [
    "MovieModel",
    "UserModel",
    "WatchEntryModel",
]
