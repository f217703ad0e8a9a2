"""Fake shop service: serves an in-memory catalogue and records orders."""

import asyncio
from uuid import uuid4

from catalogue.product.product import Product
from ordering.order.order import Order, OrderConfirmation
from shared.exceptions import ApiError
from storefront.api.port import ShopServicePort


class FakeShopService(ShopServicePort):
    """Service adapter that keeps everything in memory for tests and demos."""

    def __init__(self, products: list[Product] | None = None):
        self.products: list[Product] = list(products or [])
        self.orders: list[Order] = []
        self.product_list_calls = 0
        self.should_succeed = True
        self.failure_reason = "Service unavailable"
        # When set, requests wait on it before answering
        self.gate: asyncio.Event | None = None

    def configure(self, should_succeed: bool = True, failure_reason: str = "Service unavailable"):
        """Configure the fake adapter behavior for testing."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    async def get_product_list(self) -> list[Product]:
        self.product_list_calls += 1
        products = list(self.products)
        await self._wait()
        if not self.should_succeed:
            raise ApiError(self.failure_reason, status_code=503)
        return products

    async def create_order(self, order: Order) -> OrderConfirmation:
        await self._wait()
        if not self.should_succeed:
            raise ApiError(self.failure_reason, status_code=400)

        self.orders.append(order)
        return OrderConfirmation(id=f"order-{uuid4().hex[:12]}", total=order.total)

    def reset(self):
        """Clear recorded orders (useful between tests)."""
        self.orders.clear()
        self.product_list_calls = 0
        self.should_succeed = True
        self.failure_reason = "Service unavailable"
        self.gate = None

    async def _wait(self) -> None:
        if self.gate is not None:
            await self.gate.wait()
        else:
            await asyncio.sleep(0)
