"""Inventory validation models"""

from .base import CamelModel


class InventoryWarning(CamelModel):
    """A cart line whose requested quantity exceeds live stock"""
    product_id: str
    name: str
    requested: int
    available: int
    removed: bool = False


class InventoryCheckResult(CamelModel):
    """Response from the stock-check service"""
    valid: bool = True
    invalid_items: list[InventoryWarning] = []
