"""Saved cart storage for the cart record service"""

from datetime import datetime
from typing import Optional

from ...models.cart import CartLineItem, SavedCart
from ...models.fulfillment import FulfillmentSelection


class CartRecordDatabase:
    """In-memory saved carts, one per user"""

    def __init__(self):
        self.carts: dict[str, SavedCart] = {}

    def get_cart(self, user_id: str) -> Optional[SavedCart]:
        """Get a user's saved cart"""
        return self.carts.get(user_id)

    def save_cart(
        self,
        user_id: str,
        items: list[CartLineItem],
        fulfillment: FulfillmentSelection,
    ) -> SavedCart:
        """Create or overwrite a user's saved cart"""
        cart = SavedCart(
            items=list(items),
            fulfillment=fulfillment,
            updated_at=datetime.utcnow(),
        )
        self.carts[user_id] = cart
        return cart

    def delete_cart(self, user_id: str) -> bool:
        """Delete a user's saved cart"""
        if user_id in self.carts:
            del self.carts[user_id]
            return True
        return False

    def merge_cart(
        self,
        user_id: str,
        local_items: list[CartLineItem],
        local_fulfillment: FulfillmentSelection,
    ) -> SavedCart:
        """
        Combine a cart built before sign-in with the user's saved cart.

        Saved lines come first. A local line for the same product and
        variant adds its quantity to the saved line; other local lines are
        appended. The local fulfillment wins when it has a type.
        """
        saved = self.get_cart(user_id)

        if not saved or saved.is_empty:
            if local_items:
                return self.save_cart(user_id, local_items, local_fulfillment)
            return SavedCart(
                items=list(local_items),
                fulfillment=local_fulfillment,
                updated_at=datetime.utcnow(),
            )

        if not local_items:
            return saved

        merged = list(saved.items)
        for local_item in local_items:
            index = next(
                (i for i, item in enumerate(merged) if item.key == local_item.key),
                None,
            )
            if index is not None:
                existing = merged[index]
                merged[index] = existing.model_copy(
                    update={"quantity": existing.quantity + local_item.quantity}
                )
            else:
                merged.append(local_item)

        fulfillment = local_fulfillment if local_fulfillment.is_set else saved.fulfillment
        return self.save_cart(user_id, merged, fulfillment)

    def reset(self) -> None:
        """Drop every saved cart"""
        self.carts.clear()


# Singleton instance
cart_record_db = CartRecordDatabase()
