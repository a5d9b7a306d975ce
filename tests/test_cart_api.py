"""
Tests for the HTTP client against the real cart record service app.

httpx.ASGITransport routes requests straight into the FastAPI app, so the
client, the wire format and the server rules are exercised together.
"""
import httpx
import pytest

from farmcart.core.scheduler import ManualScheduler
from farmcart.models import FulfillmentSelection
from farmcart.models.cart import CartItemInput
from farmcart.server.database import cart_record_db, product_db
from farmcart.server.main import app
from farmcart.services.cart_api import CartApiClient, CartApiError
from farmcart.services.cart_manager import CartManager
from farmcart.services.store import CartStore
from farmcart.storage import JsonFileStorage, MemoryStorage

from .factories import TEST_USER_ID, make_item


@pytest.fixture(autouse=True)
def clean_databases():
    cart_record_db.reset()
    product_db.reset()
    yield
    cart_record_db.reset()
    product_db.reset()


@pytest.fixture
async def client():
    api = CartApiClient("http://testserver", api_key="secret", transport=httpx.ASGITransport(app=app))
    yield api
    await api.close()


def lines(*specs):
    store = CartStore()
    for product_id, quantity in specs:
        store.add_item(make_item(product_id, quantity=quantity))
    return store.items


class TestCartRecords:

    async def test_load_missing_cart_returns_none(self, client):
        assert await client.load(TEST_USER_ID) is None

    async def test_save_and_load(self, client):
        await client.save(TEST_USER_ID, lines(("prod-eggs", 2)), FulfillmentSelection(type="pickup"))

        saved = await client.load(TEST_USER_ID)

        assert [(i.product_id, i.quantity) for i in saved.items] == [("prod-eggs", 2)]
        assert saved.fulfillment.type == "pickup"
        assert saved.updated_at is not None

    async def test_merge_adds_quantities(self, client):
        await client.save(TEST_USER_ID, lines(("prod-eggs", 1)), FulfillmentSelection())

        merged = await client.merge(TEST_USER_ID, lines(("prod-eggs", 2), ("prod-butter", 1)), FulfillmentSelection())

        assert [(i.product_id, i.quantity) for i in merged.items] == [("prod-eggs", 3), ("prod-butter", 1)]

    async def test_clear(self, client):
        await client.save(TEST_USER_ID, lines(("prod-eggs", 1)), FulfillmentSelection())

        await client.clear(TEST_USER_ID)

        assert await client.load(TEST_USER_ID) is None

    async def test_check_availability(self, client):
        result = await client.check_availability(lines(("prod-butter", 5), ("prod-eggs", 1)))

        assert result.valid is False
        assert [(w.product_id, w.available) for w in result.invalid_items] == [("prod-butter", 3)]


class TestErrors:

    def failing_client(self, status_code: int, body: str = "boom") -> CartApiClient:
        transport = httpx.MockTransport(lambda request: httpx.Response(status_code, text=body))
        return CartApiClient("http://cart.test", transport=transport)

    async def test_server_error_is_wrapped(self):
        client = self.failing_client(500)

        with pytest.raises(CartApiError) as exc_info:
            await client.save(TEST_USER_ID, [], FulfillmentSelection())

        assert exc_info.value.status_code == 500
        await client.close()

    async def test_not_found_on_merge_is_an_error(self):
        client = self.failing_client(404)

        with pytest.raises(CartApiError):
            await client.merge(TEST_USER_ID, [], FulfillmentSelection())
        await client.close()

    async def test_transport_error_is_wrapped(self):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = CartApiClient("http://cart.test", transport=httpx.MockTransport(refuse))

        with pytest.raises(CartApiError) as exc_info:
            await client.check_availability(lines(("prod-eggs", 1)))

        assert exc_info.value.status_code is None
        await client.close()

    async def test_bearer_token_sent(self):
        seen = {}

        def capture(request):
            seen["authorization"] = request.headers.get("Authorization")
            return httpx.Response(200, json={"success": True})

        client = CartApiClient("http://cart.test", api_key="secret", transport=httpx.MockTransport(capture))
        await client.clear(TEST_USER_ID)
        await client.close()

        assert seen["authorization"] == "Bearer secret"


class TestEndToEnd:

    async def test_anonymous_cart_follows_user_across_devices(self, client, settings):
        laptop = CartManager(MemoryStorage(), client, client, scheduler=ManualScheduler(), settings=settings)
        product = product_db.get_product("prod-raw-milk")
        laptop.add_item(CartItemInput.from_product(product, quantity=2))
        laptop.set_fulfillment(type="pickup", location_id="loc-1")

        await laptop.set_user_id(TEST_USER_ID)
        assert laptop.sync_error is None
        assert laptop.has_coop_items

        laptop.add_item(make_item("prod-eggs", quantity=1))
        await laptop.flush()
        await laptop.close()

        phone = CartManager(MemoryStorage(), client, client, scheduler=ManualScheduler(), settings=settings)
        await phone.resume(TEST_USER_ID)

        assert [(i.product_id, i.quantity) for i in phone.items] == [("prod-raw-milk", 2), ("prod-eggs", 1)]
        assert phone.fulfillment.location_id == "loc-1"

    async def test_validation_repairs_cart_from_live_stock(self, client, settings):
        cart = CartManager(MemoryStorage(), client, client, scheduler=ManualScheduler(), settings=settings)
        cart.add_item(make_item("prod-butter", quantity=5))
        cart.add_item(make_item("prod-bone-broth", quantity=1))

        warnings = await cart.validate_inventory()

        assert [(i.product_id, i.quantity) for i in cart.items] == [("prod-butter", 3)]
        assert {w.product_id: w.removed for w in warnings} == {"prod-butter": False, "prod-bone-broth": True}

    async def test_from_settings_persists_to_file_and_owns_client(self, settings, tmp_path):
        path = tmp_path / "storage.json"
        configured = settings.model_copy(update={"storage_path": str(path)})

        cart = CartManager.from_settings(configured)
        cart.add_item(make_item("prod-eggs", quantity=2))
        assert cart._owned_client is not None
        await cart.close()
        assert cart._owned_client is None

        assert path.exists()
        reopened = CartManager(JsonFileStorage(str(path)), records=None, stock=None, settings=configured)
        assert [(i.product_id, i.quantity) for i in reopened.items] == [("prod-eggs", 2)]
