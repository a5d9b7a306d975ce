"""Contracts of the services the cart talks to"""

from typing import Optional, Protocol

from ..models.cart import CartLineItem, SavedCart
from ..models.fulfillment import FulfillmentSelection
from ..models.inventory import InventoryCheckResult


class CartServiceError(Exception):
    """Base exception for cart collaborator failures"""
    pass


class CartRecordError(CartServiceError):
    """The remote cart record could not be read or written"""
    pass


class StockCheckError(CartServiceError):
    """Live stock levels could not be checked"""
    pass


class CartRecordService(Protocol):
    """Per-user remote cart record, keyed by user id"""

    async def save(
        self,
        user_id: str,
        items: list[CartLineItem],
        fulfillment: FulfillmentSelection,
    ) -> None: ...

    async def load(self, user_id: str) -> Optional[SavedCart]: ...

    async def merge(
        self,
        user_id: str,
        items: list[CartLineItem],
        fulfillment: FulfillmentSelection,
    ) -> SavedCart: ...

    async def clear(self, user_id: str) -> None: ...


class StockChecker(Protocol):
    """Live availability lookup"""

    async def check_availability(self, items: list[CartLineItem]) -> InventoryCheckResult: ...
