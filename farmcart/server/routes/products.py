"""Product API routes"""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from ...models.product import Product
from ..database.products import product_db
from ..schemas import ProductListResponse

router = APIRouter(prefix="/api/products", tags=["Products"])


@router.get("", response_model=ProductListResponse)
async def list_products(
    tag: Optional[str] = Query(None, description="Filter by tag, e.g. co-op"),
):
    """List active catalog products"""
    products = product_db.list_products(tag=tag)
    return ProductListResponse(products=products, total=len(products))


@router.get("/{product_id}", response_model=Product)
async def get_product(product_id: str):
    """Get product details"""
    product = product_db.get_product(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product
