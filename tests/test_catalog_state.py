import asyncio

import pytest
import pytest_asyncio

from storefront.shared.core import events
from storefront.shared.domain.catalog import ALL_CATEGORIES
from storefront.shared.infrastructure.catalog_client import BadStatusError, CatalogClient, NetworkError
from storefront.shop.state import CatalogState, CatalogStatus, PreferencesState

from factories import failing_transport, json_transport, make_product


class ScriptedClient:
    """Catalog client returning queued results; each call can be held open."""

    def __init__(self):
        self.calls = []

    def queue(self, result):
        gate = asyncio.Event()
        self.calls.append((gate, result))
        return gate

    async def fetch_products(self):
        gate, result = self.calls.pop(0)
        await gate.wait()
        if isinstance(result, Exception):
            raise result
        return result


def make_catalog(bus, client):
    return CatalogState(bus, client, PreferencesState(bus))


@pytest_asyncio.fixture
async def loaded_store(make_store, catalog_payload):
    store = make_store(json_transport(catalog_payload))
    await store.catalog.fetch_products()
    return store


class TestFetch:
    def test_starts_idle_and_empty(self, make_store):
        catalog = make_store(json_transport([])).catalog

        assert catalog.status.value == CatalogStatus.IDLE.value
        assert catalog.products.value == []
        assert catalog.categories.value == [ALL_CATEGORIES]
        assert catalog.last_error is None

    @pytest.mark.asyncio
    async def test_success_loads_products(self, make_store, catalog_payload, products):
        catalog = make_store(json_transport(catalog_payload)).catalog

        await catalog.fetch_products()

        assert catalog.status.value == CatalogStatus.LOADED.value
        assert catalog.is_loading.value is False
        assert catalog.all_products.value == products
        assert catalog.products.value == products
        assert catalog.categories.value == [ALL_CATEGORIES, "electronics", "jewelery", "men's clothing"]

    @pytest.mark.asyncio
    async def test_failure_sets_error_and_keeps_empty_list(self, make_store):
        catalog = make_store(failing_transport()).catalog

        await catalog.fetch_products()

        assert catalog.status.value == CatalogStatus.FAILED.value
        assert catalog.is_loading.value is False
        assert catalog.last_error.startswith("Network error")
        assert catalog.products.value == []

    @pytest.mark.asyncio
    async def test_malformed_endpoint_ends_failed_not_loading(self, bus):
        client = CatalogClient("https://[::1/products", transport=json_transport([]))
        catalog = make_catalog(bus, client)

        await catalog.fetch_products()

        assert catalog.status.value == CatalogStatus.FAILED.value
        assert catalog.is_loading.value is False
        assert catalog.last_error.startswith("Invalid catalog address")

    @pytest.mark.asyncio
    async def test_failed_refresh_keeps_previous_products(self, bus, products):
        client = ScriptedClient()
        catalog = make_catalog(bus, client)

        client.queue(products).set()
        await catalog.fetch_products()
        client.queue(BadStatusError(500)).set()
        await catalog.fetch_products()

        assert catalog.status.value == CatalogStatus.FAILED.value
        assert catalog.all_products.value == products
        assert catalog.products.value == products
        assert "HTTP 500" in catalog.last_error

    @pytest.mark.asyncio
    async def test_error_messages_distinguish_network_and_status(self, bus):
        client = ScriptedClient()
        catalog = make_catalog(bus, client)

        client.queue(NetworkError(OSError("reset"))).set()
        await catalog.fetch_products()
        network_message = catalog.last_error

        client.queue(BadStatusError(502)).set()
        await catalog.fetch_products()

        assert network_message != catalog.last_error

    @pytest.mark.asyncio
    async def test_loading_flag_while_in_flight(self, bus, products):
        client = ScriptedClient()
        catalog = make_catalog(bus, client)
        gate = client.queue(products)

        task = asyncio.create_task(catalog.fetch_products())
        await asyncio.sleep(0)
        assert catalog.is_loading.value is True
        assert catalog.status.value == CatalogStatus.LOADING.value

        gate.set()
        await task
        assert catalog.is_loading.value is False

    @pytest.mark.asyncio
    async def test_successful_retry_clears_error(self, bus, products):
        client = ScriptedClient()
        catalog = make_catalog(bus, client)

        client.queue(NetworkError(OSError("down"))).set()
        await catalog.fetch_products()
        client.queue(products).set()
        await catalog.fetch_products()

        assert catalog.last_error is None
        assert catalog.status.value == CatalogStatus.LOADED.value

    @pytest.mark.asyncio
    async def test_filters_set_during_fetch_apply_to_result(self, bus, products):
        client = ScriptedClient()
        catalog = make_catalog(bus, client)
        gate = client.queue(products)

        task = asyncio.create_task(catalog.fetch_products())
        await asyncio.sleep(0)
        catalog.set_category("jewelery")
        gate.set()
        await task

        assert [p.id for p in catalog.products.value] == [3]

    @pytest.mark.asyncio
    async def test_stale_response_is_discarded(self, bus):
        client = ScriptedClient()
        catalog = make_catalog(bus, client)
        old = [make_product(1, title="old")]
        new = [make_product(2, title="new")]
        slow_gate = client.queue(old)
        fast_gate = client.queue(new)

        slow = asyncio.create_task(catalog.fetch_products())
        await asyncio.sleep(0)
        fast = asyncio.create_task(catalog.fetch_products())
        await asyncio.sleep(0)

        fast_gate.set()
        await fast
        slow_gate.set()
        await slow

        assert catalog.all_products.value == new
        assert catalog.is_loading.value is False

    @pytest.mark.asyncio
    async def test_stale_response_does_not_clear_loading(self, bus):
        client = ScriptedClient()
        catalog = make_catalog(bus, client)
        slow_gate = client.queue([make_product(1)])
        fast_gate = client.queue([make_product(2)])

        slow = asyncio.create_task(catalog.fetch_products())
        await asyncio.sleep(0)
        fast = asyncio.create_task(catalog.fetch_products())
        await asyncio.sleep(0)

        slow_gate.set()
        await slow
        assert catalog.is_loading.value is True

        fast_gate.set()
        await fast
        assert [p.id for p in catalog.products.value] == [2]

    @pytest.mark.asyncio
    async def test_publishes_lifecycle_events(self, bus, make_store, catalog_payload):
        received = []

        async def on_loaded(payload):
            received.append(payload)

        await bus.subscribe(events.TOPIC_CATALOG_LOADED, on_loaded)
        await make_store(json_transport(catalog_payload)).catalog.fetch_products()
        await bus.wait_until_idle()

        assert received[0]["product_count"] == 4
        assert received[0]["category_count"] == 3


class TestFilters:
    @pytest.mark.asyncio
    async def test_category_filter(self, loaded_store):
        catalog = loaded_store.catalog
        catalog.set_category("men's clothing")

        assert [p.id for p in catalog.products.value] == [1, 2]

    @pytest.mark.asyncio
    async def test_search_is_lowercased_and_matches_description(self, loaded_store):
        catalog = loaded_store.catalog
        catalog.set_search_text("RED")

        assert catalog.search_text.value == "red"
        assert [p.id for p in catalog.products.value] == [1, 2]

    @pytest.mark.asyncio
    async def test_all_category_restores_full_list_in_order(self, loaded_store, products):
        catalog = loaded_store.catalog
        catalog.set_category("jewelery")
        catalog.set_category(ALL_CATEGORIES)

        assert catalog.products.value == products

    @pytest.mark.asyncio
    async def test_all_category_still_honours_search(self, loaded_store):
        catalog = loaded_store.catalog
        catalog.set_search_text("gold")
        catalog.set_category("electronics")
        catalog.set_category(ALL_CATEGORIES)

        assert [p.id for p in catalog.products.value] == [3]

    @pytest.mark.asyncio
    async def test_unmatched_category_gives_empty_list_without_error(self, loaded_store):
        catalog = loaded_store.catalog
        catalog.set_category("Electronics")

        assert catalog.products.value == []
        assert catalog.last_error is None

    @pytest.mark.asyncio
    async def test_clearing_search_restores_category_view(self, loaded_store):
        catalog = loaded_store.catalog
        catalog.set_category("men's clothing")
        catalog.set_search_text("hat")
        catalog.set_search_text("")

        assert [p.id for p in catalog.products.value] == [1, 2]


class TestNotifications:
    def test_same_category_does_not_notify(self, make_store):
        catalog = make_store(json_transport([])).catalog
        calls = []
        catalog.subscribe(lambda: calls.append(1))

        catalog.set_category(ALL_CATEGORIES)
        assert calls == []

        catalog.set_category("jewelery")
        catalog.set_category("jewelery")
        assert len(calls) == 1

    def test_search_notifies_on_every_call(self, make_store):
        catalog = make_store(json_transport([])).catalog
        calls = []
        catalog.subscribe(lambda: calls.append(1))

        catalog.set_search_text("a")
        catalog.set_search_text("a")
        assert len(calls) == 2

    def test_unsubscribe_stops_notifications(self, make_store):
        catalog = make_store(json_transport([])).catalog
        calls = []
        handle = catalog.subscribe(lambda: calls.append(1))

        catalog.set_search_text("a")
        catalog.unsubscribe(handle)
        catalog.set_search_text("b")

        assert len(calls) == 1

    def test_toggle_grid_view_flips_preference(self, make_store):
        store = make_store(json_transport([]))

        assert store.catalog.is_grid_view is True
        store.catalog.toggle_grid_view()
        assert store.catalog.is_grid_view is False
        assert store.preferences.view_mode.value == "list"
