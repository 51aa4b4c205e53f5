"""State container for the storefront app.

Builds every store once at startup. The entry point passes the container to
the shell by reference; there is no module-level instance.
"""

from __future__ import annotations

import logging
from typing import Optional

from storefront.shared.core.configuration import SystemConfig
from storefront.shared.core.event_bus import EventBus
from storefront.shared.infrastructure.catalog_client import CatalogClient
from .cart_state import CartState
from .catalog_state import CatalogState
from .preferences_state import PreferencesState
from .shell_state import ShellState

logger = logging.getLogger(__name__)


class Store:
    """Owns the shell, preference, catalog and cart stores.

    Usage:
        # During app initialization
        store = Store(event_bus, config)
        await store.initialize()

        # Widgets receive the container and bind to its stores
        store.cart.subscribe(refresh_badge)

        # On exit
        store.dispose()

    Args:
        event_bus: The shared event bus instance
        config: Storefront configuration, defaults when omitted
        client: Catalog client override (tests inject a faked transport)
    """

    def __init__(
        self,
        event_bus: EventBus,
        config: Optional[SystemConfig] = None,
        client: Optional[CatalogClient] = None,
    ) -> None:
        self.bus = event_bus
        self.config = config or SystemConfig()

        self.app = ShellState(event_bus)
        self.preferences = PreferencesState(
            event_bus,
            view_mode=self.config.ui.view_mode,
            theme_mode=self.config.ui.theme_mode,
        )
        self.catalog = CatalogState(
            event_bus,
            client or CatalogClient(
                endpoint_url=str(self.config.catalog.endpoint_url),
                timeout=self.config.catalog.timeout,
            ),
            self.preferences,
        )
        self.cart = CartState(event_bus, self.config.checkout)
        self._disposed = False

    async def initialize(self) -> None:
        """Wire event subscriptions. Call once the event loop is running."""
        await self.app.initialize()

    def dispose(self) -> None:
        """Detach subscribers from every store and clear the bus."""
        if self._disposed:
            return
        for state in (self.preferences, self.catalog, self.cart):
            state.dispose()
        self.bus.clear()
        self._disposed = True
        logger.info("Store disposed")
