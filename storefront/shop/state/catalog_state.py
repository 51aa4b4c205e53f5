"""Product catalog store.

Holds the fetched products together with the active category and search
text, and keeps the filtered view in sync with them. The view is always
recomputed from scratch through ``filter_products``.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional

from fletx.core import RxBool, RxList, RxStr

from storefront.shared.core import events
from storefront.shared.core.event_bus import EventBus
from storefront.shared.domain.catalog import (
    ALL_CATEGORIES,
    Product,
    derive_categories,
    filter_products,
)
from storefront.shared.infrastructure.catalog_client import CatalogClient, FetchError
from .base import ReactiveState
from .preferences_state import PreferencesState

logger = logging.getLogger(__name__)


class CatalogStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


class CatalogState(ReactiveState):
    """Reactive state for the product listing screen.

    Fetch lifecycle: ``idle -> loading -> loaded | failed``, re-entering
    ``loading`` on every later fetch. A failed fetch keeps whatever products
    were already loaded.

    Each fetch is tagged with a generation number and only the newest one may
    write results, so a slow earlier response can't replace a newer one.
    """

    def __init__(
        self,
        event_bus: EventBus,
        client: CatalogClient,
        preferences: PreferencesState,
    ) -> None:
        super().__init__(event_bus)
        self.client = client
        self.preferences = preferences

        # Snapshot
        self.all_products: RxList[Product] = RxList([])
        self.selected_category: RxStr = RxStr(ALL_CATEGORIES)
        self.search_text: RxStr = RxStr("")

        # Derived
        self.products: RxList[Product] = RxList([])
        self.categories: RxList[str] = RxList([ALL_CATEGORIES])

        # Fetch lifecycle
        self.status: RxStr = RxStr(CatalogStatus.IDLE.value)
        self.is_loading: RxBool = RxBool(False)
        self.error: RxStr = RxStr("")

        self._generation = 0

    # --- Read helpers ---

    @property
    def last_error(self) -> Optional[str]:
        return self.error.value or None

    @property
    def is_grid_view(self) -> bool:
        return self.preferences.is_grid_view

    # --- Public Actions ---

    def set_category(self, category: str) -> None:
        """Select a category (``ALL_CATEGORIES`` clears the filter)."""
        if category == self.selected_category.value:
            return
        self.selected_category.value = category
        self._apply_filters()
        self._changed()

    def set_search_text(self, text: str) -> None:
        """Store the lower-cased query and refilter, on every call."""
        self.search_text.value = text.lower()
        self._apply_filters()
        self._changed()

    def toggle_grid_view(self) -> None:
        self.preferences.toggle_view_mode()

    async def fetch_products(self) -> None:
        """Load the catalog, recording failures in ``error`` instead of raising."""
        self._generation += 1
        generation = self._generation

        self.status.value = CatalogStatus.LOADING.value
        self.is_loading.value = True
        self.error.value = ""
        self._changed()
        await self.bus.publish(
            events.TOPIC_CATALOG_FETCH_START,
            events.create_catalog_fetch_start_event(generation),
        )

        try:
            products = await self.client.fetch_products()
        except FetchError as e:
            if self._is_stale(generation):
                return
            logger.error(f"Catalog fetch #{generation} failed ({e.kind}): {e.user_message}")
            self.status.value = CatalogStatus.FAILED.value
            self.is_loading.value = False
            self.error.value = e.user_message
            self._changed()
            await self.bus.publish(
                events.TOPIC_CATALOG_FAILED,
                events.create_catalog_failed_event(generation, e.user_message, e.kind),
            )
            return

        if self._is_stale(generation):
            return
        self._load(products)
        logger.info(f"Catalog fetch #{generation} loaded {len(products)} products")
        await self.bus.publish(
            events.TOPIC_CATALOG_LOADED,
            events.create_catalog_loaded_event(
                generation,
                len(products),
                len(self.categories.value) - 1,
            ),
        )

    # --- Internals ---

    def _is_stale(self, generation: int) -> bool:
        if generation != self._generation:
            logger.debug(
                f"Discarding catalog response #{generation}; #{self._generation} is newer"
            )
            return True
        return False

    def _load(self, products: List[Product]) -> None:
        self.all_products.value = list(products)
        self.categories.value = derive_categories(products)
        self._apply_filters()
        self.status.value = CatalogStatus.LOADED.value
        self.is_loading.value = False
        self.error.value = ""
        self._changed()

    def _apply_filters(self) -> None:
        self.products.value = filter_products(
            self.all_products.value,
            self.selected_category.value,
            self.search_text.value,
        )
