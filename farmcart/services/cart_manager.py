"""
Cart Manager

One object per storefront session that wires the in-memory store, the
device storage mirror, account sync and inventory validation together.
"""

import logging
from datetime import datetime
from typing import Iterable, Optional

from ..core.config import Settings, get_settings
from ..core.scheduler import AsyncioScheduler, Scheduler
from ..core.session import SyncState
from ..models.cart import CartItemInput, CartLineItem
from ..models.fulfillment import FulfillmentSelection
from ..models.inventory import InventoryWarning
from ..storage.backends import JsonFileStorage, KeyValueStorage
from ..storage.mirror import PersistenceMirror
from .cart_api import CartApiClient
from .interfaces import CartRecordService, StockChecker
from .inventory_validator import InventoryValidator
from .store import CartStore
from .sync_agent import RemoteSyncAgent

logger = logging.getLogger(__name__)


class CartManager:
    """
    Shopping cart for one session.

    Usage:
        cart = CartManager.from_settings()
        await cart.resume(user_id)          # already signed in
        cart.add_item(CartItemInput(...))
        await cart.validate_inventory()
        await cart.close()
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        records: CartRecordService,
        stock: StockChecker,
        scheduler: Optional[Scheduler] = None,
        settings: Optional[Settings] = None,
    ):
        settings = settings or get_settings()
        self.store = CartStore()
        self.mirror = PersistenceMirror(
            storage,
            items_key=settings.cart_storage_key,
            fulfillment_key=settings.fulfillment_storage_key,
        )
        self.sync = RemoteSyncAgent(
            self.store,
            records,
            scheduler or AsyncioScheduler(),
            debounce_seconds=settings.sync_debounce_seconds,
        )
        self.validator = InventoryValidator(self.store, stock)
        self._owned_client: Optional[CartApiClient] = None

        self.mirror.hydrate(self.store)
        self.mirror.attach(self.store)
        self.sync.attach()

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "CartManager":
        """Create a cart backed by a JSON file and the cart record service"""
        settings = settings or get_settings()
        client = CartApiClient.from_settings(settings)
        manager = cls(
            storage=JsonFileStorage(settings.storage_path),
            records=client,
            stock=client,
            settings=settings,
        )
        manager._owned_client = client
        return manager

    async def close(self) -> None:
        """Push anything pending and release resources"""
        await self.sync.flush()
        await self.sync.wait_idle()
        self.sync.detach()
        self.mirror.detach()
        if self._owned_client:
            await self._owned_client.close()
            self._owned_client = None

    # ==================== Cart contents ====================

    @property
    def items(self) -> list[CartLineItem]:
        return self.store.items

    @property
    def fulfillment(self) -> FulfillmentSelection:
        return self.store.fulfillment

    @property
    def item_count(self) -> int:
        return self.store.item_count

    @property
    def subtotal(self) -> float:
        return self.store.subtotal

    @property
    def has_coop_items(self) -> bool:
        return self.store.has_coop_items

    def add_item(self, item: CartItemInput) -> CartLineItem:
        return self.store.add_item(item)

    def add_items(self, items: Iterable[CartItemInput]) -> list[CartLineItem]:
        return self.store.add_items(items)

    def update_quantity(self, item_id: str, quantity: int) -> None:
        self.store.update_quantity(item_id, quantity)

    def remove_item(self, item_id: str) -> None:
        self.store.remove_item(item_id)

    def set_fulfillment(self, **changes) -> FulfillmentSelection:
        return self.store.set_fulfillment(**changes)

    async def clear_cart(self) -> None:
        """Empty the cart here and in the user's saved cart"""
        self.store.clear()
        await self.sync.clear_remote()

    # ==================== Account sync ====================

    @property
    def user_id(self) -> Optional[str]:
        return self.sync.user_id

    @property
    def sync_state(self) -> SyncState:
        return self.sync.state

    @property
    def is_syncing(self) -> bool:
        return self.sync.is_syncing

    @property
    def sync_error(self) -> Optional[str]:
        return self.sync.sync_error

    @property
    def has_pending_sync(self) -> bool:
        return self.sync.has_pending_sync

    @property
    def last_synced_at(self) -> Optional[datetime]:
        return self.sync.last_synced_at

    async def set_user_id(self, user_id: Optional[str]) -> None:
        await self.sync.set_user_id(user_id)

    async def resume(self, user_id: str) -> None:
        await self.sync.resume(user_id)

    async def flush(self) -> None:
        await self.sync.flush()

    # ==================== Inventory ====================

    @property
    def inventory_warnings(self) -> list[InventoryWarning]:
        return self.store.inventory_warnings

    async def validate_inventory(self) -> list[InventoryWarning]:
        return await self.validator.validate_inventory()

    def clear_inventory_warnings(self) -> None:
        self.validator.clear_inventory_warnings()
