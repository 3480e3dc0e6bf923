"""Async HTTP client for the store API.

The cart session and the checkout flow talk to the catalog, cart and order
endpoints only through this client. Every failure is turned into a
``StoreException`` subclass so callers can surface a message and stay in a
re-attemptable state.
"""

import logging
from typing import Any, List, Optional

import httpx
from pydantic import ValidationError

from metier_store.config import settings
from metier_store.exceptions import CollaboratorException, UnexpectedResponseException
from metier_store.schemas.cart_schemas import Cart
from metier_store.schemas.checkout_schemas import OrderRead, OrderRequest
from metier_store.schemas.product_schemas import CategoryRead, ProductList, ProductRead
from metier_store.utils.session import SessionContext

logger = logging.getLogger(__name__)


def _error_message(response: httpx.Response) -> str:
    """Pick the most useful message out of an error response."""
    try:
        data = response.json()
    except ValueError:
        data = None

    if isinstance(data, dict):
        for key in ("message", "error", "detail"):
            value = data.get(key)
            if isinstance(value, str) and value:
                return value
            if value:
                # FastAPI request validation errors come back as a list
                return str(value)

    return response.text or response.reason_phrase or f"HTTP error {response.status_code}"


class StoreApiClient:
    """Catalog, cart and order calls against the store API."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        session: Optional[SessionContext] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.session = session or SessionContext()
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.API_BASE_URL,
            timeout=settings.REQUEST_TIMEOUT_SECONDS if timeout is None else timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "StoreApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = await self._client.request(
                method, path, headers=self.session.headers(), **kwargs
            )
        except httpx.TimeoutException as e:
            logger.warning(f"Store API timeout on {method} {path}: {e}")
            raise CollaboratorException("The store did not respond in time") from e
        except httpx.RequestError as e:
            logger.warning(f"Store API request failed on {method} {path}: {e}")
            raise CollaboratorException(f"Could not reach the store: {e}") from e

        if response.status_code >= 400:
            message = _error_message(response)
            logger.error(f"Store API {method} {path} failed ({response.status_code}): {message}")
            raise CollaboratorException(message, status_code=response.status_code)

        try:
            return response.json() if response.content else None
        except ValueError as e:
            raise UnexpectedResponseException(f"Malformed response from {path}") from e

    @staticmethod
    def _parse(model, data: Any, key: Optional[str] = None):
        try:
            if key is not None:
                data = data[key]
            return model.model_validate(data)
        except (KeyError, TypeError, ValidationError) as e:
            raise UnexpectedResponseException(f"Unexpected {model.__name__} payload") from e

    # ---- catalog ----

    async def fetch_products(
        self,
        *,
        search: Optional[str] = None,
        category: Optional[str] = None,
        page: Optional[int] = None,
        per_page: Optional[int] = None,
    ) -> ProductList:
        params = {
            key: value
            for key, value in {
                "search": search,
                "category": category,
                "page": page,
                "per_page": per_page,
            }.items()
            if value
        }
        data = await self._request("GET", "/api/products", params=params)
        return self._parse(ProductList, data)

    async def fetch_product_detail(self, product_id: int) -> ProductRead:
        data = await self._request("GET", f"/api/products/{product_id}")
        return self._parse(ProductRead, data)

    async def fetch_related_products(self, product_id: int) -> List[ProductRead]:
        data = await self._request("GET", f"/api/products/{product_id}/related")
        return self._parse(ProductList, data).products

    async def fetch_categories(self) -> List[CategoryRead]:
        data = await self._request("GET", "/api/categories")
        try:
            return [CategoryRead.model_validate(c) for c in data["categories"]]
        except (KeyError, TypeError, ValidationError) as e:
            raise UnexpectedResponseException("Unexpected categories payload") from e

    # ---- cart ----

    async def get_cart(self) -> Cart:
        return self._parse(Cart, await self._request("GET", "/api/cart"), "cart")

    async def get_cart_count(self) -> int:
        data = await self._request("GET", "/api/cart/count")
        try:
            return int(data["count"])
        except (KeyError, TypeError, ValueError) as e:
            raise UnexpectedResponseException("Unexpected cart count payload") from e

    async def add_to_cart(self, product_id: int, quantity: int = 1) -> Cart:
        data = await self._request(
            "POST", "/api/cart/items", json={"product_id": product_id, "quantity": quantity}
        )
        return self._parse(Cart, data, "cart")

    async def update_cart_item(self, item_id: int, quantity: int) -> Cart:
        data = await self._request(
            "PUT", f"/api/cart/items/{item_id}", json={"quantity": quantity}
        )
        return self._parse(Cart, data, "cart")

    async def remove_from_cart(self, item_id: int) -> Cart:
        data = await self._request("DELETE", f"/api/cart/items/{item_id}")
        return self._parse(Cart, data, "cart")

    async def clear_cart(self) -> Cart:
        return self._parse(Cart, await self._request("DELETE", "/api/cart"), "cart")

    # ---- orders ----

    async def create_order(self, order_request: OrderRequest) -> OrderRead:
        data = await self._request("POST", "/api/orders", json=order_request.model_dump())
        return self._parse(OrderRead, data, "order")

    async def get_order(self, order_number: str) -> OrderRead:
        data = await self._request("GET", f"/api/orders/{order_number}")
        return self._parse(OrderRead, data, "order")

    async def confirm_payment(self, order_number: str) -> OrderRead:
        data = await self._request("POST", f"/api/orders/{order_number}/confirm-payment")
        return self._parse(OrderRead, data, "order")
