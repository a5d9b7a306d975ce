"""Sync session state for a mounted cart"""

import logging
from datetime import datetime
from typing import Optional
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)


class SyncState(str, Enum):
    """Where the cart stands with respect to the user's remote record"""
    ANONYMOUS = "anonymous"
    ATTACHING = "attaching"
    SYNCED = "synced"
    DEGRADED = "degraded"


@dataclass
class SyncSession:
    """
    One attachment of the cart to a user.

    The epoch changes on every attach or detach. Async results carry the
    epoch they were started under and are dropped if it no longer matches.
    """
    epoch: int = 0
    user_id: Optional[str] = None
    state: SyncState = SyncState.ANONYMOUS
    error: Optional[str] = None
    inflight: int = 0
    last_synced_at: Optional[datetime] = None

    @property
    def is_attached(self) -> bool:
        return self.user_id is not None

    def start(self, user_id: Optional[str], state: SyncState) -> int:
        """Begin a new attachment and return its epoch"""
        self.epoch += 1
        self.user_id = user_id
        self.error = None
        self.last_synced_at = None
        self.update_state(state)
        return self.epoch

    def is_current(self, epoch: int, user_id: Optional[str]) -> bool:
        """Check that an async result still belongs to this attachment"""
        return epoch == self.epoch and user_id == self.user_id

    def update_state(self, new_state: SyncState) -> None:
        """Update session state"""
        if new_state != self.state:
            logger.debug(f"Sync state {self.state.value} -> {new_state.value}")
        self.state = new_state
