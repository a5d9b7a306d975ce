"""Catalog product model"""

from typing import Optional

from pydantic import Field

from .base import CamelModel
from .cart import PricingType, WeightUnit

COOP_TAG = "co-op"


class Product(CamelModel):
    """Product in the farm catalog"""
    id: str
    name: str
    slug: str
    pricing_type: PricingType = PricingType.FIXED
    base_price: float = Field(gt=0)
    sale_price: Optional[float] = None
    weight_unit: WeightUnit = WeightUnit.LB
    estimated_weight: Optional[float] = None
    featured_image_url: Optional[str] = None
    tags: list[str] = []
    stock_quantity: int = Field(ge=0, default=0)
    track_inventory: bool = True
    allow_backorder: bool = False
    is_active: bool = True

    @property
    def is_coop(self) -> bool:
        return COOP_TAG in self.tags
