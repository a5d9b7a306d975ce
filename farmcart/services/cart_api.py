"""
Cart API Client

HTTP client for the cart record service: saved carts, login merge and
live stock checks.
"""

import json
import logging
from typing import Any, Optional

import httpx

from ..core.config import Settings, get_settings
from ..models.cart import CartLineItem, SavedCart
from ..models.fulfillment import FulfillmentSelection
from ..models.inventory import InventoryCheckResult
from .interfaces import CartRecordError, StockCheckError

logger = logging.getLogger(__name__)


class CartApiError(CartRecordError, StockCheckError):
    """Request to the cart record service failed"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class CartApiClient:
    """
    Client for the cart record service.

    Serves both as the remote cart record and as the stock checker.
    """

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize cart API client.

        Args:
            base_url: Base URL of the cart record service
            api_key: Bearer token sent with every request
            timeout: Request timeout in seconds
            transport: Custom httpx transport (e.g. ASGI app in tests)
        """
        self.base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._http_client = httpx.AsyncClient(timeout=timeout, transport=transport)

        if not api_key:
            logger.debug("No API key configured - requests will be sent without Authorization")

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "CartApiClient":
        """Create client from application settings"""
        settings = settings or get_settings()
        return cls(
            base_url=settings.api_base_url,
            api_key=settings.api_key,
            timeout=settings.request_timeout,
        )

    async def close(self) -> None:
        """Close HTTP client"""
        await self._http_client.aclose()

    async def __aenter__(self) -> "CartApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    def _generate_headers(self) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        body: Optional[dict] = None,
        allow_not_found: bool = False,
    ) -> Optional[Any]:
        """Make an HTTP request and return the decoded JSON body"""
        url = f"{self.base_url}{path}"
        body_str = json.dumps(body) if body is not None else None

        try:
            response = await self._http_client.request(
                method=method,
                url=url,
                headers=self._generate_headers(),
                content=body_str,
            )
        except httpx.HTTPError as e:
            logger.error(f"Request failed: {method} {url} - {e}")
            raise CartApiError(f"{method} {path} failed: {e}") from e

        if allow_not_found and response.status_code == 404:
            return None

        if response.status_code >= 400:
            logger.error(f"Request failed: {response.status_code} - {response.text}")
            raise CartApiError(
                f"{method} {path} returned {response.status_code}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise CartApiError(f"{method} {path} returned invalid JSON", response.status_code) from e

    @staticmethod
    def _cart_body(items: list[CartLineItem], fulfillment: FulfillmentSelection) -> dict:
        return {
            "items": [item.to_json_dict() for item in items],
            "fulfillment": fulfillment.to_json_dict(),
        }

    @staticmethod
    def _parse_cart(data: dict) -> SavedCart:
        try:
            return SavedCart.model_validate(data["cart"])
        except (KeyError, TypeError, ValueError) as e:
            raise CartApiError(f"Unexpected cart payload: {e}") from e

    # ==================== Cart record APIs ====================

    async def load(self, user_id: str) -> Optional[SavedCart]:
        """Get the user's saved cart, None if there is none"""
        data = await self._request("GET", f"/api/carts/{user_id}", allow_not_found=True)
        if data is None:
            return None
        return self._parse_cart(data)

    async def save(
        self,
        user_id: str,
        items: list[CartLineItem],
        fulfillment: FulfillmentSelection,
    ) -> None:
        """Overwrite the user's saved cart"""
        await self._request("PUT", f"/api/carts/{user_id}", body=self._cart_body(items, fulfillment))

    async def merge(
        self,
        user_id: str,
        items: list[CartLineItem],
        fulfillment: FulfillmentSelection,
    ) -> SavedCart:
        """Combine a local cart with the user's saved cart server-side"""
        data = await self._request(
            "POST",
            f"/api/carts/{user_id}/merge",
            body=self._cart_body(items, fulfillment),
        )
        return self._parse_cart(data)

    async def clear(self, user_id: str) -> None:
        """Delete the user's saved cart"""
        await self._request("DELETE", f"/api/carts/{user_id}")

    # ==================== Inventory APIs ====================

    async def check_availability(self, items: list[CartLineItem]) -> InventoryCheckResult:
        """Report lines whose requested quantity exceeds live stock"""
        data = await self._request(
            "POST",
            "/api/inventory/validate",
            body={"items": [item.to_json_dict() for item in items]},
        )
        try:
            return InventoryCheckResult.model_validate(data)
        except ValueError as e:
            raise CartApiError(f"Unexpected inventory payload: {e}") from e
