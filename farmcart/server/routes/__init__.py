# API Routes

from .carts import router as carts_router
from .inventory import router as inventory_router
from .products import router as products_router

__all__ = ["carts_router", "inventory_router", "products_router"]
