"""Shop service port: abstract interface for the remote storefront service."""

from abc import ABC, abstractmethod

from catalogue.product.product import Product
from ordering.order.order import Order, OrderConfirmation


class ShopServicePort(ABC):
    """What the presenter needs from the remote service."""

    @abstractmethod
    async def get_product_list(self) -> list[Product]:
        """Fetch the ordered product list.

        Raises:
            ApiError: on transport or service failure.
        """
        ...

    @abstractmethod
    async def create_order(self, order: Order) -> OrderConfirmation:
        """Submit an order.

        Raises:
            ApiError: on transport or service failure, or if the service
                rejects the order.
        """
        ...

    async def aclose(self) -> None:
        """Release transport resources, if the adapter holds any."""
        return None
