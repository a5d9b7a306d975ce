"""Inventory Validator"""

import logging

from ..models.inventory import InventoryWarning
from .interfaces import StockChecker
from .store import CartStore

logger = logging.getLogger(__name__)


class InventoryValidator:
    """
    Reconciles the cart against live stock on demand.

    Lines whose product ran out are removed, lines asking for more than is
    left are clamped down, and every discrepancy is kept as a warning for
    display. If stock cannot be checked the cart is left alone.
    """

    def __init__(self, store: CartStore, stock: StockChecker):
        self.store = store
        self.stock = stock

    async def validate_inventory(self) -> list[InventoryWarning]:
        items = self.store.items
        if not items:
            self.store.clear_inventory_warnings()
            return []

        try:
            result = await self.stock.check_availability(items)
        except Exception as e:
            logger.error(f"Failed to validate inventory: {e}")
            return self.store.inventory_warnings

        warnings = [
            w.model_copy(update={"removed": True}) if w.available <= 0 and not w.removed else w
            for w in result.invalid_items
        ]
        if not warnings:
            self.store.clear_inventory_warnings()
            return []

        self.store.set_inventory_warnings(warnings)
        self._apply_corrections(warnings)
        return warnings

    def _apply_corrections(self, warnings: list[InventoryWarning]) -> None:
        removed = {w.product_id for w in warnings if w.removed}
        clamped = {
            w.product_id: w.available
            for w in warnings
            if w.product_id not in removed and w.available > 0
        }

        changed = False
        corrected = []
        for item in self.store.items:
            if item.product_id in removed:
                changed = True
                continue
            available = clamped.get(item.product_id)
            if available is not None and item.quantity > available:
                item = item.model_copy(update={"quantity": available})
                changed = True
            corrected.append(item)

        if changed:
            logger.info(
                f"Inventory repair: removed {len(removed)} product(s), clamped {len(clamped)} product(s)"
            )
            self.store.replace_items(corrected)

    def clear_inventory_warnings(self) -> None:
        self.store.clear_inventory_warnings()
