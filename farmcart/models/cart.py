"""Cart models"""

import uuid
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Optional

from pydantic import Field

from .base import CamelModel
from .fulfillment import FulfillmentSelection

if TYPE_CHECKING:
    from .product import Product


class PricingType(str, Enum):
    FIXED = "fixed"
    WEIGHT = "weight"


class WeightUnit(str, Enum):
    LB = "lb"
    OZ = "oz"
    KG = "kg"
    G = "g"


class BundleComponent(CamelModel):
    """One constituent product of a bundle line"""
    product_id: str
    quantity: int = Field(gt=0)


class CartItemInput(CamelModel):
    """A line item as handed to add_item, before it has a local id"""
    product_id: str
    variant_id: Optional[str] = None
    name: str
    slug: str
    pricing_type: PricingType = PricingType.FIXED
    base_price: float
    sale_price: Optional[float] = None
    weight_unit: WeightUnit = WeightUnit.LB
    estimated_weight: Optional[float] = None
    quantity: int = Field(default=1, gt=0)
    image_url: Optional[str] = None
    is_bundle: bool = False
    bundle_items: list[BundleComponent] = []
    is_coop_item: bool = False

    @property
    def key(self) -> tuple[str, Optional[str]]:
        """Identity used to merge repeat adds into one line"""
        return self.product_id, self.variant_id

    @property
    def unit_price(self) -> float:
        return self.sale_price if self.sale_price is not None else self.base_price

    @property
    def line_total(self) -> float:
        """Contribution of this line to the cart subtotal"""
        if self.pricing_type == PricingType.WEIGHT and self.estimated_weight:
            return self.unit_price * self.estimated_weight * self.quantity
        return self.unit_price * self.quantity

    @classmethod
    def from_product(
        cls,
        product: "Product",
        quantity: int = 1,
        variant_id: Optional[str] = None,
    ) -> "CartItemInput":
        """Snapshot a catalog product into a new line item"""
        return cls(
            product_id=product.id,
            variant_id=variant_id,
            name=product.name,
            slug=product.slug,
            pricing_type=product.pricing_type,
            base_price=product.base_price,
            sale_price=product.sale_price,
            weight_unit=product.weight_unit,
            estimated_weight=product.estimated_weight,
            quantity=quantity,
            image_url=product.featured_image_url,
            is_coop_item=product.is_coop,
        )


class CartLineItem(CartItemInput):
    """Line item held in the cart"""
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))


class SavedCart(CamelModel):
    """A user's cart as kept by the remote record service"""
    items: list[CartLineItem] = []
    fulfillment: FulfillmentSelection = Field(default_factory=FulfillmentSelection)
    updated_at: Optional[datetime] = None

    @property
    def is_empty(self) -> bool:
        return not self.items
