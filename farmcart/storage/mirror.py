"""
Persistence Mirror

Keeps a device-local copy of the cart so a restart restores it without a
round trip. Items and fulfillment live under separate keys; a corrupt value
under one key never costs the other.
"""

import json
import logging
from typing import Callable, Optional

from pydantic import TypeAdapter, ValidationError

from ..models.cart import CartLineItem
from ..models.fulfillment import FulfillmentSelection
from ..services.store import CartStore, StoreEvent
from .backends import KeyValueStorage

logger = logging.getLogger(__name__)

_items_adapter = TypeAdapter(list[CartLineItem])


class PersistenceMirror:
    """Writes every cart change straight through to device storage"""

    def __init__(
        self,
        storage: KeyValueStorage,
        items_key: str,
        fulfillment_key: str,
    ):
        self.storage = storage
        self.items_key = items_key
        self.fulfillment_key = fulfillment_key
        self._store: Optional[CartStore] = None
        self._unsubscribe: Optional[Callable[[], None]] = None

    # ==================== Reading ====================

    def _read(self, key: str) -> Optional[str]:
        try:
            return self.storage.get(key)
        except Exception as e:
            logger.error(f"Failed to read {key} from device storage: {e}")
            return None

    def load_items(self) -> list[CartLineItem]:
        raw = self._read(self.items_key)
        if not raw:
            return []
        try:
            return _items_adapter.validate_json(raw)
        except ValidationError as e:
            logger.error(f"Failed to parse cart: {e}")
            return []

    def load_fulfillment(self) -> FulfillmentSelection:
        raw = self._read(self.fulfillment_key)
        if not raw:
            return FulfillmentSelection()
        try:
            return FulfillmentSelection.model_validate_json(raw)
        except ValidationError as e:
            logger.error(f"Failed to parse fulfillment: {e}")
            return FulfillmentSelection()

    def load(self) -> tuple[list[CartLineItem], FulfillmentSelection]:
        """Read both keys independently"""
        return self.load_items(), self.load_fulfillment()

    def hydrate(self, store: CartStore) -> None:
        """Restore the stored cart into the store without writing it back"""
        items, fulfillment = self.load()
        store.replace(items, fulfillment, notify=False)
        logger.info(f"Restored {len(items)} cart line(s) from device storage")

    # ==================== Writing ====================

    def attach(self, store: CartStore) -> None:
        """Start mirroring every change of the store"""
        self.detach()
        self._store = store
        self._unsubscribe = store.subscribe(self._on_change)

    def detach(self) -> None:
        if self._unsubscribe:
            self._unsubscribe()
        self._unsubscribe = None
        self._store = None

    def _on_change(self, event: StoreEvent) -> None:
        if self._store is None:
            return
        if event == StoreEvent.ITEMS_CHANGED:
            self.write_items(self._store.items)
        elif event == StoreEvent.FULFILLMENT_CHANGED:
            self.write_fulfillment(self._store.fulfillment)

    def _write(self, key: str, value: str) -> bool:
        try:
            self.storage.set(key, value)
            return True
        except Exception as e:
            logger.error(f"Failed to write {key} to device storage: {e}")
            return False

    def write_items(self, items: list[CartLineItem]) -> bool:
        """Best-effort write of the item list"""
        return self._write(self.items_key, json.dumps([item.to_json_dict() for item in items]))

    def write_fulfillment(self, fulfillment: FulfillmentSelection) -> bool:
        """Best-effort write of the fulfillment selection"""
        return self._write(self.fulfillment_key, json.dumps(fulfillment.to_json_dict()))
