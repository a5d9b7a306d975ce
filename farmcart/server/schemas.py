"""Request and response models for the cart record service"""

from typing import Optional

from pydantic import Field

from ..models.base import CamelModel
from ..models.cart import CartLineItem, SavedCart
from ..models.fulfillment import FulfillmentSelection
from ..models.product import Product


class CartPayload(CamelModel):
    """Cart sent by a client to save or merge"""
    items: list[CartLineItem] = []
    fulfillment: FulfillmentSelection = Field(default_factory=FulfillmentSelection)


class SavedCartResponse(CamelModel):
    """Saved cart API response"""
    cart: SavedCart
    message: Optional[str] = None


class ClearCartResponse(CamelModel):
    success: bool
    message: Optional[str] = None


class InventoryValidationRequest(CamelModel):
    """Cart lines to check against live stock"""
    items: list[CartLineItem] = []


class ProductListResponse(CamelModel):
    products: list[Product]
    total: int
