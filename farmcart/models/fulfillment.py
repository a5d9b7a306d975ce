"""Fulfillment models"""

from enum import Enum
from typing import Optional

from .base import CamelModel


class FulfillmentType(str, Enum):
    PICKUP = "pickup"
    DELIVERY = "delivery"
    SHIPPING = "shipping"


class Address(CamelModel):
    """Mailing address for delivery or shipping"""
    line1: str
    line2: str = ""
    city: str
    state: str
    postal_code: str


class FulfillmentSelection(CamelModel):
    """
    How the order will reach the customer.

    location_id is meaningful for pickup, zone_id for delivery and address
    for delivery or shipping. Fields that do not match the type are kept
    as they are; callers keep the selection coherent.
    """
    type: Optional[FulfillmentType] = None
    location_id: Optional[str] = None
    zone_id: Optional[str] = None
    scheduled_date: Optional[str] = None
    address: Optional[Address] = None

    @property
    def is_set(self) -> bool:
        return self.type is not None
