"""In-memory cart store"""

import logging
import uuid
from enum import Enum
from typing import Callable, Iterable, Optional

from ..models.cart import CartItemInput, CartLineItem
from ..models.fulfillment import FulfillmentSelection
from ..models.inventory import InventoryWarning

logger = logging.getLogger(__name__)


class StoreEvent(str, Enum):
    """What part of the cart a mutation touched"""
    ITEMS_CHANGED = "items_changed"
    FULFILLMENT_CHANGED = "fulfillment_changed"


StoreListener = Callable[[StoreEvent], None]


class CartStore:
    """
    Single source of truth for the cart of the active session.

    All mutations are synchronous and cannot fail. Observers are told about
    every change to items or fulfillment right after it is applied.
    """

    def __init__(self):
        self._items: list[CartLineItem] = []
        self._fulfillment = FulfillmentSelection()
        self._warnings: list[InventoryWarning] = []
        self._listeners: list[StoreListener] = []

    # ==================== Observers ====================

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        """Register a change listener and return a function that removes it"""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, event: StoreEvent) -> None:
        for listener in list(self._listeners):
            listener(event)

    # ==================== State ====================

    @property
    def items(self) -> list[CartLineItem]:
        return list(self._items)

    @property
    def fulfillment(self) -> FulfillmentSelection:
        return self._fulfillment

    @property
    def inventory_warnings(self) -> list[InventoryWarning]:
        return list(self._warnings)

    @property
    def is_empty(self) -> bool:
        return not self._items

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self._items)

    @property
    def subtotal(self) -> float:
        return round(sum(item.line_total for item in self._items), 2)

    @property
    def has_coop_items(self) -> bool:
        return any(item.is_coop_item for item in self._items)

    def get_item(self, item_id: str) -> Optional[CartLineItem]:
        """Get a line item by its local id"""
        return next((item for item in self._items if item.id == item_id), None)

    # ==================== Item mutations ====================

    def add_item(self, item: CartItemInput) -> CartLineItem:
        """
        Add a product to the cart.

        A line with the same product and variant only has its quantity
        raised; its price and name snapshot are left as they were.
        """
        index = next(
            (i for i, existing in enumerate(self._items) if existing.key == item.key),
            None,
        )

        if index is not None:
            existing = self._items[index]
            line = existing.model_copy(update={"quantity": existing.quantity + item.quantity})
            self._items = self._items[:index] + [line] + self._items[index + 1:]
        else:
            line = CartLineItem(**item.model_dump(exclude={"id"}), id=str(uuid.uuid4()))
            self._items = self._items + [line]
            logger.debug(f"Added new cart line {line.id} for product {item.product_id}")

        self._drop_warnings(item.product_id)
        self._notify(StoreEvent.ITEMS_CHANGED)
        return line

    def add_items(self, items: Iterable[CartItemInput]) -> list[CartLineItem]:
        """Add several products in order, e.g. when reordering"""
        return [self.add_item(item) for item in items]

    def update_quantity(self, item_id: str, quantity: int) -> None:
        """Set a line's quantity exactly; zero or less removes the line"""
        if quantity <= 0:
            self._items = [item for item in self._items if item.id != item_id]
        else:
            self._items = [
                item.model_copy(update={"quantity": quantity}) if item.id == item_id else item
                for item in self._items
            ]
        self._notify(StoreEvent.ITEMS_CHANGED)

    def remove_item(self, item_id: str) -> None:
        """Remove a line by its local id"""
        item = self.get_item(item_id)
        if item:
            self._drop_warnings(item.product_id)
        self._items = [i for i in self._items if i.id != item_id]
        self._notify(StoreEvent.ITEMS_CHANGED)

    def replace_items(self, items: Iterable[CartLineItem]) -> None:
        """Swap in a corrected item list"""
        self._items = [item for item in items if item.quantity > 0]
        self._notify(StoreEvent.ITEMS_CHANGED)

    # ==================== Fulfillment ====================

    def set_fulfillment(self, **changes) -> FulfillmentSelection:
        """Shallow-merge the given fields into the fulfillment selection"""
        merged = {**self._fulfillment.model_dump(), **changes}
        self._fulfillment = FulfillmentSelection.model_validate(merged)
        self._notify(StoreEvent.FULFILLMENT_CHANGED)
        return self._fulfillment

    # ==================== Whole-cart ====================

    def replace(
        self,
        items: Iterable[CartLineItem],
        fulfillment: FulfillmentSelection,
        notify: bool = True,
    ) -> None:
        """Adopt a cart from elsewhere (device storage, merge or pull) verbatim"""
        self._items = list(items)
        self._fulfillment = fulfillment
        if notify:
            self._notify(StoreEvent.ITEMS_CHANGED)
            self._notify(StoreEvent.FULFILLMENT_CHANGED)

    def clear(self) -> None:
        """Empty the cart, reset fulfillment and drop all warnings"""
        self._items = []
        self._fulfillment = FulfillmentSelection()
        self._warnings = []
        self._notify(StoreEvent.ITEMS_CHANGED)
        self._notify(StoreEvent.FULFILLMENT_CHANGED)

    # ==================== Inventory warnings ====================

    def set_inventory_warnings(self, warnings: Iterable[InventoryWarning]) -> None:
        self._warnings = list(warnings)

    def clear_inventory_warnings(self) -> None:
        self._warnings = []

    def _drop_warnings(self, product_id: str) -> None:
        self._warnings = [w for w in self._warnings if w.product_id != product_id]
