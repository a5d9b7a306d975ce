"""Inventory validation route"""

import logging

from fastapi import APIRouter

from ...models.inventory import InventoryCheckResult
from ..database.products import product_db
from ..schemas import InventoryValidationRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/inventory", tags=["Inventory"])


@router.post("/validate", response_model=InventoryCheckResult)
async def validate_inventory(request: InventoryValidationRequest):
    """Report cart lines whose requested quantity exceeds live stock"""
    invalid_items = product_db.check_inventory(request.items)
    if invalid_items:
        logger.info(f"Inventory check flagged {len(invalid_items)} of {len(request.items)} line(s)")
    return InventoryCheckResult(valid=not invalid_items, invalid_items=invalid_items)
