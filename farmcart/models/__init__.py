# Cart Models

from .cart import (
    BundleComponent,
    CartItemInput,
    CartLineItem,
    PricingType,
    SavedCart,
    WeightUnit,
)
from .fulfillment import Address, FulfillmentSelection, FulfillmentType
from .inventory import InventoryCheckResult, InventoryWarning
from .product import Product

__all__ = [
    "BundleComponent",
    "CartItemInput",
    "CartLineItem",
    "PricingType",
    "SavedCart",
    "WeightUnit",
    "Address",
    "FulfillmentSelection",
    "FulfillmentType",
    "InventoryCheckResult",
    "InventoryWarning",
    "Product",
]
