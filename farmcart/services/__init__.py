# Cart services

from .store import CartStore, StoreEvent
from .interfaces import (
    CartRecordError,
    CartRecordService,
    CartServiceError,
    StockCheckError,
    StockChecker,
)
from .cart_api import CartApiClient, CartApiError
from .sync_agent import RemoteSyncAgent
from .inventory_validator import InventoryValidator
from .cart_manager import CartManager

__all__ = [
    "CartStore",
    "StoreEvent",
    "CartRecordError",
    "CartRecordService",
    "CartServiceError",
    "StockCheckError",
    "StockChecker",
    "CartApiClient",
    "CartApiError",
    "RemoteSyncAgent",
    "InventoryValidator",
    "CartManager",
]
