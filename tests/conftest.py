import os
from pathlib import Path

import pytest

from catalogue.product.product import Product
from catalogue.product.store import CatalogStore
from identity.buyer.store import BuyerStore
from ordering.cart.store import CartStore
from shared.events.bus import EventBus
from storefront.api.fake import FakeShopService
from storefront.app import create_storefront
from storefront.config import Settings


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Logging environment to run tests under",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Select the logging environment and configure structlog once for the run.
    """
    os.environ["ENVIRONMENT"] = session.config.option.env

    from storefront.utils.logging import configure_logging

    configure_logging()


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


# ---------------------------------------------------------------------------
# Sample data
# ---------------------------------------------------------------------------
PEN = Product(
    id="p-pen",
    title="Fountain pen",
    description="Writes smoothly.",
    image="/pen.svg",
    category="soft skill",
    price=750,
)
NOTEBOOK = Product(
    id="p-notebook",
    title="Notebook",
    description="Ninety-six pages.",
    image="/notebook.svg",
    category="hard skill",
    price=1450.5,
)
MYSTERY = Product(
    id="p-mystery",
    title="Mystery box",
    description="Nobody knows.",
    image="/mystery.svg",
    category="other",
    price=None,
)


@pytest.fixture
def products():
    return [PEN, NOTEBOOK, MYSTERY]


# ---------------------------------------------------------------------------
# Bus and stores
# ---------------------------------------------------------------------------
@pytest.fixture
def events():
    return EventBus()


@pytest.fixture
def recorder(events):
    """Record every emitted event as ``(name, payload)``."""
    received = []
    events.on_all(lambda envelope: received.append((envelope.name, envelope.payload)))
    return received


@pytest.fixture
def catalog_store(events):
    return CatalogStore(events)


@pytest.fixture
def cart_store(events):
    return CartStore(events)


@pytest.fixture
def buyer_store(events):
    return BuyerStore(events)


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------
@pytest.fixture
def settings():
    return Settings(
        api_url="http://shop.test/api",
        cdn_url="http://cdn.test",
        currency_label="synapses",
    )


@pytest.fixture
def fake_service(products):
    return FakeShopService(products)


@pytest.fixture
def storefront(settings, fake_service):
    return create_storefront(settings, service=fake_service)
