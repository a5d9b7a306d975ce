"""Shared fixtures for the cart test suite"""

from unittest.mock import AsyncMock

import pytest

from farmcart.core.config import Settings
from farmcart.core.scheduler import ManualScheduler
from farmcart.models import InventoryCheckResult, SavedCart
from farmcart.services.cart_manager import CartManager
from farmcart.storage import MemoryStorage


@pytest.fixture
def settings():
    """Settings isolated from the developer's environment"""
    return Settings(_env_file=None, sync_debounce_seconds=1.0)


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def records():
    """
    Remote cart record double.

    merge echoes the local cart back, load finds nothing.
    """
    mock = AsyncMock()
    mock.load.return_value = None
    mock.merge.side_effect = lambda user_id, items, fulfillment: SavedCart(
        items=items, fulfillment=fulfillment
    )
    return mock


@pytest.fixture
def stock():
    mock = AsyncMock()
    mock.check_availability.return_value = InventoryCheckResult(valid=True, invalid_items=[])
    return mock


@pytest.fixture
def cart(storage, records, stock, scheduler, settings):
    return CartManager(storage, records, stock, scheduler=scheduler, settings=settings)
