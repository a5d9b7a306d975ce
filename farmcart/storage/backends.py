"""Durable per-device key/value storage"""

import json
import logging
import os
import tempfile
from typing import Optional, Protocol

logger = logging.getLogger(__name__)


class KeyValueStorage(Protocol):
    """String storage scoped to one device"""

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryStorage:
    """In-process storage, lost when the process exits"""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self.data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class JsonFileStorage:
    """
    Storage kept in a single JSON object file.

    Every set rewrites the whole file through a temporary file and
    os.replace, so a crash never leaves a half-written file behind.
    """

    def __init__(self, path: str):
        self.path = path

    def _read_all(self) -> dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Storage file {self.path} does not hold a JSON object")
        return data

    def get(self, key: str) -> Optional[str]:
        try:
            data = self._read_all()
        except (OSError, ValueError) as e:
            logger.error(f"Failed to read storage file {self.path}: {e}")
            return None
        value = data.get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        try:
            data = self._read_all()
        except ValueError:
            logger.warning(f"Storage file {self.path} was unreadable, starting it over")
            data = {}
        data[key] = value

        directory = os.path.dirname(self.path) or "."
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".farmcart-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f)
            os.replace(tmp_path, self.path)
        except OSError:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise
