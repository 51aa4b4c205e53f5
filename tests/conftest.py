"""Shared pytest fixtures for the storefront tests."""

import httpx
import pytest

from storefront.shared.core.configuration import SystemConfig
from storefront.shared.core.event_bus import EventBus
from storefront.shared.domain.catalog import Product
from storefront.shared.infrastructure.catalog_client import CatalogClient
from storefront.shop.state import Store

from factories import CATALOG_URL, product_payload


@pytest.fixture
def catalog_payload():
    return [
        product_payload(1, "Red Shirt", 10.00, "Cotton tee", "men's clothing"),
        product_payload(2, "Blue Hat", 25.50, "Wool hat with red trim", "men's clothing"),
        product_payload(3, "Gold Ring", 99.99, "Solid gold", "jewelery"),
        product_payload(4, "SSD Drive", 109.00, "1TB internal", "electronics"),
    ]


@pytest.fixture
def products(catalog_payload):
    return [Product.model_validate(item) for item in catalog_payload]


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def config():
    return SystemConfig()


@pytest.fixture
def make_store(bus, config):
    """Factory building a Store whose catalog client uses the given transport."""

    def _make(transport: httpx.MockTransport) -> Store:
        client = CatalogClient(endpoint_url=CATALOG_URL, transport=transport)
        return Store(bus, config, client=client)

    return _make
