"""Tests for ApiService against a mocked HTTP transport."""

import json

import httpx
import pytest

from identity.buyer.data import BuyerData
from ordering.order.order import Order
from shared.exceptions import ApiError
from storefront.api.service import ApiService

BASE_URL = "http://shop.test/api"

PRODUCT_LIST = {
    "total": 2,
    "items": [
        {
            "id": "p-pen",
            "title": "Fountain pen",
            "description": "Writes smoothly.",
            "image": "/pen.svg",
            "category": "soft skill",
            "price": 750,
        },
        {
            "id": "p-mystery",
            "title": "Mystery box",
            "description": "Nobody knows.",
            "image": "/mystery.svg",
            "category": "other",
            "price": None,
        },
    ],
}


def _make_service(handler):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url=BASE_URL)
    return ApiService(client=client)


def _make_order():
    buyer = BuyerData(payment="card", email="buyer@example.com", phone="89991234567", address="Main st 1")
    return Order(
        payment=buyer.payment,
        email=buyer.email,
        phone=buyer.phone,
        address=buyer.address,
        items=["p-pen"],
        total=750,
    )


class TestGetProductList:
    async def test_parses_products_in_order(self):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json=PRODUCT_LIST)

        products = await _make_service(handler).get_product_list()

        assert [p.id for p in products] == ["p-pen", "p-mystery"]
        assert products[0].price == 750
        assert products[1].is_priceless
        assert requests[0].method == "GET"
        assert requests[0].url == httpx.URL(f"{BASE_URL}/product")

    async def test_error_body_becomes_api_error(self):
        def handler(request):
            return httpx.Response(503, json={"error": "Catalogue offline"})

        with pytest.raises(ApiError) as exc_info:
            await _make_service(handler).get_product_list()

        assert exc_info.value.message == "Catalogue offline"
        assert exc_info.value.status_code == 503

    async def test_error_without_body_uses_reason_phrase(self):
        def handler(request):
            return httpx.Response(500, text="oops")

        with pytest.raises(ApiError) as exc_info:
            await _make_service(handler).get_product_list()

        assert exc_info.value.message == "Internal Server Error"
        assert str(exc_info.value) == "Internal Server Error (HTTP 500)"

    async def test_malformed_list_is_rejected(self):
        def handler(request):
            return httpx.Response(200, json={"items": [{"title": "no id"}]})

        with pytest.raises(ApiError, match="Malformed product list"):
            await _make_service(handler).get_product_list()

    async def test_non_json_body_is_rejected(self):
        def handler(request):
            return httpx.Response(200, text="<html></html>")

        with pytest.raises(ApiError, match="not valid JSON"):
            await _make_service(handler).get_product_list()

    async def test_transport_failure_is_wrapped(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(ApiError) as exc_info:
            await _make_service(handler).get_product_list()

        assert exc_info.value.status_code is None
        assert "connection refused" in exc_info.value.message


class TestCreateOrder:
    async def test_posts_order_and_parses_confirmation(self):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json={"id": "order-1", "total": 750})

        confirmation = await _make_service(handler).create_order(_make_order())

        assert confirmation.id == "order-1"
        assert confirmation.total == 750
        assert requests[0].method == "POST"
        assert requests[0].url.path == "/api/order"
        assert json.loads(requests[0].content) == {
            "payment": "card",
            "email": "buyer@example.com",
            "phone": "89991234567",
            "address": "Main st 1",
            "items": ["p-pen"],
            "total": 750.0,
        }

    async def test_rejection_carries_service_message(self):
        def handler(request):
            return httpx.Response(400, json={"error": "Wrong total"})

        with pytest.raises(ApiError, match="Wrong total"):
            await _make_service(handler).create_order(_make_order())

    async def test_malformed_confirmation_is_rejected(self):
        def handler(request):
            return httpx.Response(200, json={"ok": True})

        with pytest.raises(ApiError, match="Malformed order response"):
            await _make_service(handler).create_order(_make_order())


class TestLifecycle:
    async def test_owned_client_is_closed(self):
        service = ApiService(BASE_URL, timeout=1.0)

        async with service:
            assert service.client.base_url == httpx.URL(f"{BASE_URL}/")

        assert service.client.is_closed

    async def test_injected_client_is_left_open(self):
        client = httpx.AsyncClient(base_url=BASE_URL)
        service = ApiService(client=client)

        await service.aclose()

        assert not client.is_closed
        await client.aclose()
