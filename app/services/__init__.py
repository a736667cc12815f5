# app/services/__init__.py

from .entry_store import EntryStore
from .user_service import UserService
from .watchtime_ledger import WatchtimeLedger
from .watch_entry_service import WatchEntryService
from .unlock_sweep_service import UnlockSweepService

__all__ = [
    "EntryStore",
    "UserService",
    "WatchtimeLedger",
    "WatchEntryService",
    "UnlockSweepService",
]
