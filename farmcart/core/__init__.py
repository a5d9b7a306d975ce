# Core modules

from .config import settings, get_settings, Settings
from .scheduler import AsyncioScheduler, DebouncedTask, ManualScheduler, Scheduler
from .session import SyncSession, SyncState

__all__ = [
    "settings",
    "get_settings",
    "Settings",
    "AsyncioScheduler",
    "DebouncedTask",
    "ManualScheduler",
    "Scheduler",
    "SyncSession",
    "SyncState",
]
