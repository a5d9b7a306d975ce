# Database modules

from .products import product_db, ProductDatabase
from .carts import cart_record_db, CartRecordDatabase

__all__ = [
    "product_db",
    "ProductDatabase",
    "cart_record_db",
    "CartRecordDatabase",
]
