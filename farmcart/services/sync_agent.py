"""
Remote Sync Agent

Replicates the local cart to the signed-in user's remote record and
reconciles local and remote carts when a user signs in.

The cart is local-first: mutations never wait on the network. Pushes are
debounced, and failures only show up in sync_error.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from ..core.scheduler import DebouncedTask, Scheduler
from ..core.session import SyncSession, SyncState
from .interfaces import CartRecordService
from .store import CartStore, StoreEvent

logger = logging.getLogger(__name__)


class RemoteSyncAgent:
    """Keeps a user's remote cart record in step with the local store"""

    def __init__(
        self,
        store: CartStore,
        records: CartRecordService,
        scheduler: Scheduler,
        debounce_seconds: float = 1.0,
    ):
        self.store = store
        self.records = records
        self.session = SyncSession()
        self._pending = False
        self._push_task = DebouncedTask(self._push, debounce_seconds, scheduler)
        self._unsubscribe: Optional[Callable[[], None]] = None

    def attach(self) -> None:
        """Start watching the store for changes"""
        if self._unsubscribe is None:
            self._unsubscribe = self.store.subscribe(self._on_change)

    def detach(self) -> None:
        if self._unsubscribe:
            self._unsubscribe()
        self._unsubscribe = None
        self._push_task.cancel()

    # ==================== State ====================

    @property
    def user_id(self) -> Optional[str]:
        return self.session.user_id

    @property
    def state(self) -> SyncState:
        return self.session.state

    @property
    def sync_error(self) -> Optional[str]:
        return self.session.error

    @property
    def is_syncing(self) -> bool:
        """True while a push, merge, load or clear is in flight"""
        return self.session.inflight > 0

    @property
    def has_pending_sync(self) -> bool:
        """True while a change has not been pushed yet"""
        return self._pending

    @property
    def last_synced_at(self) -> Optional[datetime]:
        """When the remote record last matched the local cart"""
        return self.session.last_synced_at

    def _record_error(self, epoch: int, user_id: str, message: str) -> None:
        if self.session.is_current(epoch, user_id):
            self.session.error = message

    # ==================== Sign-in / sign-out ====================

    async def set_user_id(self, user_id: Optional[str]) -> None:
        """
        Attach the cart to a user, or detach it with None.

        Attaching sends the local cart to the record service for merging and
        adopts whatever comes back. Signing in again as the same user does
        nothing unless the last merge failed, in which case it is retried.
        Detaching keeps the local cart and stops pushing; calls already in
        flight are left to finish.
        """
        if user_id is None:
            self._detach_user()
            return

        if user_id == self.session.user_id and self.session.state in (SyncState.ATTACHING, SyncState.SYNCED):
            logger.debug(f"Cart already attached to user {user_id}")
            return

        self._push_task.cancel()
        epoch = self.session.start(user_id, SyncState.ATTACHING)
        logger.info(f"Merging local cart into saved cart for user {user_id}")

        self.session.inflight += 1
        try:
            merged = await self.records.merge(user_id, self.store.items, self.store.fulfillment)
        except Exception as e:
            logger.error(f"Failed to merge carts: {e}")
            if self.session.is_current(epoch, user_id):
                self.session.error = "Failed to sync cart with account"
                self.session.update_state(SyncState.DEGRADED)
                self._resume_pending()
            return
        finally:
            self.session.inflight -= 1

        if not self.session.is_current(epoch, user_id):
            logger.info(f"Dropping merge result for user {user_id}, session changed")
            return

        self.session.update_state(SyncState.SYNCED)
        self.session.last_synced_at = datetime.utcnow()
        self.store.replace(merged.items, merged.fulfillment)

    async def resume(self, user_id: str) -> None:
        """
        Attach to a user who was already signed in when the cart was created.

        No merge happens. If the local cart is empty the saved cart is pulled
        once and adopted when it has items.
        """
        if user_id == self.session.user_id and self.session.state != SyncState.ANONYMOUS:
            return

        self._push_task.cancel()
        epoch = self.session.start(user_id, SyncState.SYNCED)
        if not self.store.is_empty:
            self._resume_pending()
            return

        self.session.inflight += 1
        try:
            saved = await self.records.load(user_id)
        except Exception as e:
            logger.error(f"Failed to load saved cart: {e}")
            self._record_error(epoch, user_id, "Failed to load saved cart")
            return
        finally:
            self.session.inflight -= 1

        if not self.session.is_current(epoch, user_id):
            return
        if saved and not saved.is_empty and self.store.is_empty:
            logger.info(f"Restored {len(saved.items)} saved cart line(s) for user {user_id}")
            self.session.last_synced_at = datetime.utcnow()
            self.store.replace(saved.items, saved.fulfillment)

    def _detach_user(self) -> None:
        previous = self.session.user_id
        self._push_task.cancel()
        self._pending = False
        self.session.start(None, SyncState.ANONYMOUS)
        if previous:
            logger.info(f"Detached cart from user {previous}, keeping local cart")

    # ==================== Pushing ====================

    def _on_change(self, event: StoreEvent) -> None:
        if not self.session.is_attached:
            return
        self._pending = True
        if self.session.state == SyncState.ATTACHING:
            return
        self._push_task.schedule()

    def _resume_pending(self) -> None:
        if self._pending:
            self._push_task.schedule()

    async def _push(self) -> None:
        user_id = self.session.user_id
        if user_id is None or self.session.state == SyncState.ATTACHING:
            return

        epoch = self.session.epoch
        items = self.store.items
        fulfillment = self.store.fulfillment
        self._pending = False

        self.session.inflight += 1
        self.session.error = None
        try:
            await self.records.save(user_id, items, fulfillment)
            logger.debug(f"Pushed {len(items)} cart line(s) for user {user_id}")
            if self.session.is_current(epoch, user_id):
                self.session.last_synced_at = datetime.utcnow()
        except Exception as e:
            logger.error(f"Failed to sync cart to database: {e}")
            self._record_error(epoch, user_id, "Failed to sync cart")
        finally:
            self.session.inflight -= 1

    async def flush(self) -> None:
        """Push a pending change now instead of waiting out the quiet period"""
        await self._push_task.flush()

    async def wait_idle(self) -> None:
        """Wait for every push already started"""
        await self._push_task.wait()

    async def clear_remote(self) -> None:
        """Delete the user's remote cart record, if a user is attached"""
        user_id = self.session.user_id
        if user_id is None:
            return

        self._push_task.cancel()
        self._pending = False
        epoch = self.session.epoch
        # a push already on the wire must land before the delete
        await self._push_task.wait()
        if not self.session.is_current(epoch, user_id):
            return

        self.session.inflight += 1
        try:
            await self.records.clear(user_id)
        except Exception as e:
            logger.error(f"Failed to clear saved cart: {e}")
            self._record_error(epoch, user_id, "Failed to clear saved cart")
        finally:
            self.session.inflight -= 1
