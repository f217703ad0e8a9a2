"""Client for the remote storefront service: product list and order submission."""

import httpx
import structlog
from pydantic import ValidationError

from catalogue.product.product import Product, ProductList
from ordering.order.order import Order, OrderConfirmation
from shared.exceptions import ApiError
from storefront.api.port import ShopServicePort

logger = structlog.get_logger(__name__)

PRODUCT_LIST_PATH = "/product"
ORDER_PATH = "/order"


class ApiService(ShopServicePort):
    """Async HTTP client wrapping the two service endpoints.

    Args:
        base_url: Service base URL, e.g. ``https://example.com/api/weblarek``.
        timeout: Request timeout in seconds.
        client: Preconfigured client to use instead of building one (its
            base URL is used as is).
    """

    def __init__(
        self,
        base_url: str = "",
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            headers={"Content-Type": "application/json"},
        )

    async def get_product_list(self) -> list[Product]:
        """Fetch the ordered product list."""
        data = await self._request("GET", PRODUCT_LIST_PATH)
        try:
            products = ProductList.model_validate(data).items
        except ValidationError as exc:
            logger.error("product_list_malformed", error=str(exc))
            raise ApiError("Malformed product list response") from exc

        logger.info("product_list_fetched", count=len(products))
        return products

    async def create_order(self, order: Order) -> OrderConfirmation:
        """Submit an order and return the server confirmation."""
        data = await self._request("POST", ORDER_PATH, json=order.model_dump(mode="json"))
        try:
            confirmation = OrderConfirmation.model_validate(data)
        except ValidationError as exc:
            logger.error("order_response_malformed", error=str(exc))
            raise ApiError("Malformed order response") from exc

        logger.info("order_created", order_id=confirmation.id, total=confirmation.total)
        return confirmation

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self) -> "ApiService":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    # -------------------------------------------------------------------
    # Transport
    # -------------------------------------------------------------------
    async def _request(self, method: str, path: str, **kwargs) -> dict:
        try:
            response = await self.client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.error("api_request_failed", method=method, path=path, error=str(exc))
            raise ApiError(f"Request to {path} failed: {exc}") from exc

        if response.is_error:
            message = _error_message(response)
            logger.error(
                "api_error_response",
                method=method,
                path=path,
                status_code=response.status_code,
                error=message,
            )
            raise ApiError(message, status_code=response.status_code)

        try:
            return response.json()
        except ValueError as exc:
            logger.error("api_response_not_json", method=method, path=path)
            raise ApiError(f"Response from {path} is not valid JSON") from exc


def _error_message(response: httpx.Response) -> str:
    """Extract the service's ``error`` field, falling back to the reason phrase."""
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return response.reason_phrase or f"HTTP {response.status_code}"
