"""Product: an immutable catalogue entry as delivered by the product service."""

from pydantic import BaseModel


class Product(BaseModel):
    """A product offered in the storefront.

    ``price`` is ``None`` for priceless products: they can be browsed but
    never added to the basket.
    """

    id: str
    title: str
    description: str = ""
    image: str = ""
    category: str = ""
    price: float | None = None

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "examples": [
                {
                    "id": "854cef69-976d-4c2a-a18c-2aa45046c390",
                    "title": "+1 hour in the day",
                    "description": "If you badly need to fit more into your day.",
                    "image": "/5_Dots.svg",
                    "category": "soft skill",
                    "price": 750,
                }
            ]
        },
    }

    @property
    def is_priceless(self) -> bool:
        return self.price is None


class ProductList(BaseModel):
    """Response body of the product-list endpoint."""

    total: int = 0
    items: list[Product] = []
