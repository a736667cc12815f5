# app/core/__init__.py

from .config import get_settings, Settings
from .auth import create_access_token, verify_token

__all__ = [
    "get_settings",
    "Settings",
    "create_access_token",
    "verify_token",
]
