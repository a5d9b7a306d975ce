"""
Farm Cart

Local-first shopping cart for the farm storefront: in-memory store,
device storage mirror, debounced account sync and inventory repair.
"""

from .services.cart_manager import CartManager

__version__ = "1.0.0"

__all__ = ["CartManager", "__version__"]
