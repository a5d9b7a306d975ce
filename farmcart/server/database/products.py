"""Farm product catalog for the cart record service"""

from typing import Optional

from ...models.cart import CartLineItem, PricingType, WeightUnit
from ...models.inventory import InventoryWarning
from ...models.product import Product

# Seed catalog
PRODUCTS: dict[str, Product] = {
    "prod-raw-milk": Product(
        id="prod-raw-milk",
        name="Raw A2 Whole Milk (Half Gallon)",
        slug="raw-a2-whole-milk",
        base_price=8.99,
        featured_image_url="/images/products/raw-milk.jpg",
        tags=["dairy", "co-op"],
        stock_quantity=120,
    ),
    "prod-eggs": Product(
        id="prod-eggs",
        name="Pastured Chicken Eggs (Dozen)",
        slug="pastured-chicken-eggs",
        base_price=7.50,
        sale_price=6.75,
        featured_image_url="/images/products/eggs.jpg",
        tags=["eggs"],
        stock_quantity=200,
    ),
    "prod-ribeye": Product(
        id="prod-ribeye",
        name="Grass-Fed Ribeye Steak",
        slug="grass-fed-ribeye-steak",
        pricing_type=PricingType.WEIGHT,
        base_price=24.00,
        weight_unit=WeightUnit.LB,
        estimated_weight=1.25,
        featured_image_url="/images/products/ribeye.jpg",
        tags=["beef"],
        stock_quantity=40,
    ),
    "prod-ground-beef": Product(
        id="prod-ground-beef",
        name="Grass-Fed Ground Beef",
        slug="grass-fed-ground-beef",
        pricing_type=PricingType.WEIGHT,
        base_price=9.50,
        weight_unit=WeightUnit.LB,
        estimated_weight=1.0,
        featured_image_url="/images/products/ground-beef.jpg",
        tags=["beef", "co-op"],
        stock_quantity=150,
    ),
    "prod-butter": Product(
        id="prod-butter",
        name="Cultured Raw Butter",
        slug="cultured-raw-butter",
        base_price=12.99,
        featured_image_url="/images/products/butter.jpg",
        tags=["dairy"],
        stock_quantity=3,
    ),
    "prod-sourdough": Product(
        id="prod-sourdough",
        name="Einkorn Sourdough Loaf",
        slug="einkorn-sourdough-loaf",
        base_price=11.00,
        featured_image_url="/images/products/sourdough.jpg",
        tags=["bakery"],
        track_inventory=False,
    ),
    "prod-honey": Product(
        id="prod-honey",
        name="Raw Wildflower Honey (1 lb)",
        slug="raw-wildflower-honey",
        base_price=14.00,
        featured_image_url="/images/products/honey.jpg",
        tags=["pantry"],
        stock_quantity=0,
        allow_backorder=True,
    ),
    "prod-bone-broth": Product(
        id="prod-bone-broth",
        name="Beef Bone Broth (Quart)",
        slug="beef-bone-broth",
        base_price=16.50,
        featured_image_url="/images/products/bone-broth.jpg",
        tags=["pantry"],
        stock_quantity=0,
    ),
    "prod-kefir": Product(
        id="prod-kefir",
        name="Raw Goat Milk Kefir",
        slug="raw-goat-milk-kefir",
        base_price=10.25,
        featured_image_url="/images/products/kefir.jpg",
        tags=["dairy", "co-op"],
        stock_quantity=25,
        is_active=False,
    ),
}


class ProductDatabase:
    """In-memory product catalog"""

    def __init__(self):
        self.products = {pid: p.model_copy() for pid, p in PRODUCTS.items()}

    def get_product(self, product_id: str) -> Optional[Product]:
        """Get a product by ID"""
        return self.products.get(product_id)

    def list_products(self, tag: Optional[str] = None, active_only: bool = True) -> list[Product]:
        """List catalog products, optionally filtered by tag"""
        results = list(self.products.values())
        if active_only:
            results = [p for p in results if p.is_active]
        if tag:
            results = [p for p in results if tag in p.tags]
        return results

    def update_stock(self, product_id: str, quantity_change: int) -> bool:
        """
        Update product stock.

        Args:
            product_id: Product to update
            quantity_change: Positive to add, negative to remove

        Returns:
            True if successful
        """
        product = self.products.get(product_id)
        if not product:
            return False

        new_quantity = product.stock_quantity + quantity_change
        if new_quantity < 0:
            return False

        product.stock_quantity = new_quantity
        return True

    def check_inventory(self, items: list[CartLineItem]) -> list[InventoryWarning]:
        """
        Find cart lines the catalog cannot fill.

        Missing or inactive products are reported as removed. Products that
        track inventory and do not allow backorders are reported when stock
        is below the requested quantity.
        """
        warnings = []
        for item in items:
            product = self.get_product(item.product_id)

            if not product or not product.is_active:
                warnings.append(InventoryWarning(
                    product_id=item.product_id,
                    name=item.name,
                    requested=item.quantity,
                    available=0,
                    removed=True,
                ))
                continue

            if (
                product.track_inventory
                and not product.allow_backorder
                and product.stock_quantity < item.quantity
            ):
                warnings.append(InventoryWarning(
                    product_id=item.product_id,
                    name=item.name,
                    requested=item.quantity,
                    available=product.stock_quantity,
                    removed=product.stock_quantity == 0,
                ))

        return warnings

    def reset(self) -> None:
        """Restore the seed catalog"""
        self.products = {pid: p.model_copy() for pid, p in PRODUCTS.items()}


# Singleton instance
product_db = ProductDatabase()
