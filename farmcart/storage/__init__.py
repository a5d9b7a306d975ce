# Device storage

from .backends import JsonFileStorage, KeyValueStorage, MemoryStorage
from .mirror import PersistenceMirror

__all__ = [
    "JsonFileStorage",
    "KeyValueStorage",
    "MemoryStorage",
    "PersistenceMirror",
]
