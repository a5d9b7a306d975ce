"""Saved cart API routes"""

import logging

from fastapi import APIRouter, HTTPException

from ..database.carts import cart_record_db
from ..schemas import CartPayload, ClearCartResponse, SavedCartResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/carts", tags=["Carts"])


@router.get("/{user_id}", response_model=SavedCartResponse)
async def get_saved_cart(user_id: str):
    """Get a user's saved cart"""
    cart = cart_record_db.get_cart(user_id)
    if not cart:
        raise HTTPException(status_code=404, detail="Cart not found")
    return SavedCartResponse(cart=cart)


@router.put("/{user_id}", response_model=SavedCartResponse)
async def save_cart(user_id: str, payload: CartPayload):
    """Create or overwrite a user's saved cart"""
    cart = cart_record_db.save_cart(user_id, payload.items, payload.fulfillment)
    logger.debug(f"Saved {len(cart.items)} line(s) for user {user_id}")
    return SavedCartResponse(cart=cart, message="Cart saved")


@router.post("/{user_id}/merge", response_model=SavedCartResponse)
async def merge_cart(user_id: str, payload: CartPayload):
    """Merge a cart built before sign-in into the user's saved cart"""
    cart = cart_record_db.merge_cart(user_id, payload.items, payload.fulfillment)
    logger.info(f"Merged cart for user {user_id}: {len(cart.items)} line(s)")
    return SavedCartResponse(cart=cart, message="Cart merged")


@router.delete("/{user_id}", response_model=ClearCartResponse)
async def clear_saved_cart(user_id: str):
    """Delete a user's saved cart"""
    deleted = cart_record_db.delete_cart(user_id)
    return ClearCartResponse(
        success=True,
        message="Cart cleared" if deleted else "No saved cart",
    )
