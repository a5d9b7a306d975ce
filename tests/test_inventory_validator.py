"""
Tests for on-demand inventory repair.

Stock responses come from an AsyncMock stock checker.
"""
from farmcart.models import InventoryCheckResult, InventoryWarning
from farmcart.services.cart_api import CartApiError

from .factories import make_item


def shortage(product_id: str, requested: int, available: int, removed: bool = False) -> InventoryCheckResult:
    return InventoryCheckResult(
        valid=False,
        invalid_items=[InventoryWarning(
            product_id=product_id,
            name=f"Product {product_id}",
            requested=requested,
            available=available,
            removed=removed,
        )],
    )


class TestValidateInventory:

    async def test_short_stock_clamps_quantity(self, cart, stock):
        cart.add_item(make_item("prod-p", quantity=5))
        stock.check_availability.return_value = shortage("prod-p", 5, 2)

        await cart.validate_inventory()

        assert [(i.product_id, i.quantity) for i in cart.items] == [("prod-p", 2)]
        assert cart.inventory_warnings == [
            InventoryWarning(product_id="prod-p", name="Product prod-p", requested=5, available=2, removed=False)
        ]

    async def test_sold_out_removes_line(self, cart, stock):
        cart.add_item(make_item("prod-p", quantity=5))
        cart.add_item(make_item("prod-q", quantity=1))
        stock.check_availability.return_value = shortage("prod-p", 5, 0, removed=True)

        await cart.validate_inventory()

        assert [i.product_id for i in cart.items] == ["prod-q"]
        assert cart.inventory_warnings[0].removed is True

    async def test_zero_available_removes_even_without_flag(self, cart, stock):
        cart.add_item(make_item("prod-p", quantity=5))
        stock.check_availability.return_value = shortage("prod-p", 5, 0, removed=False)

        warnings = await cart.validate_inventory()

        assert cart.items == []
        assert cart.inventory_warnings[0].removed is True
        assert warnings[0].removed is True

    async def test_sold_out_product_removed_for_every_variant(self, cart, stock):
        cart.add_item(make_item("prod-p", variant_id="small", quantity=1))
        cart.add_item(make_item("prod-p", variant_id="large", quantity=1))
        stock.check_availability.return_value = shortage("prod-p", 1, 0, removed=True)

        await cart.validate_inventory()

        assert cart.items == []

    async def test_sends_full_item_list(self, cart, stock):
        cart.add_item(make_item("prod-p", quantity=5))
        cart.add_item(make_item("prod-q", quantity=1))

        await cart.validate_inventory()

        (items,) = stock.check_availability.await_args.args
        assert [i.product_id for i in items] == ["prod-p", "prod-q"]

    async def test_everything_available_clears_old_warnings(self, cart, stock):
        cart.add_item(make_item("prod-p", quantity=5))
        stock.check_availability.return_value = shortage("prod-p", 5, 2)
        await cart.validate_inventory()

        stock.check_availability.return_value = InventoryCheckResult(valid=True, invalid_items=[])
        await cart.validate_inventory()

        assert cart.inventory_warnings == []
        assert cart.items[0].quantity == 2

    async def test_empty_cart_skips_service_and_clears_warnings(self, cart, stock):
        cart.store.set_inventory_warnings([
            InventoryWarning(product_id="gone", name="Gone", requested=1, available=0, removed=True)
        ])

        result = await cart.validate_inventory()

        assert result == []
        assert cart.inventory_warnings == []
        stock.check_availability.assert_not_awaited()

    async def test_service_failure_leaves_cart_untouched(self, cart, stock):
        cart.add_item(make_item("prod-p", quantity=5))
        stock.check_availability.side_effect = CartApiError("down", status_code=502)

        await cart.validate_inventory()

        assert cart.items[0].quantity == 5
        assert cart.inventory_warnings == []

    async def test_repair_is_persisted(self, cart, stock, storage, settings):
        cart.add_item(make_item("prod-p", quantity=5))
        stock.check_availability.return_value = shortage("prod-p", 5, 2)

        await cart.validate_inventory()

        assert '"quantity": 2' in storage.get(settings.cart_storage_key)


class TestWarningLifecycle:

    async def test_dismissing_warnings_keeps_items(self, cart, stock):
        cart.add_item(make_item("prod-p", quantity=5))
        stock.check_availability.return_value = shortage("prod-p", 5, 2)
        await cart.validate_inventory()

        cart.clear_inventory_warnings()

        assert cart.inventory_warnings == []
        assert cart.items[0].quantity == 2

    async def test_re_adding_product_clears_its_warning(self, cart, stock):
        cart.add_item(make_item("prod-p", quantity=5))
        stock.check_availability.return_value = shortage("prod-p", 5, 0, removed=True)
        await cart.validate_inventory()

        cart.add_item(make_item("prod-p", quantity=1))

        assert cart.inventory_warnings == []
        assert cart.items[0].quantity == 1
