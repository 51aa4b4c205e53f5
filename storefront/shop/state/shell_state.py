"""Application Shell State Management.

Turns event-bus traffic into the status line and the log feed shown by the
shell. Uses FletXr reactive primitives so the shell re-renders on change.
"""

from __future__ import annotations

import time
from typing import Any, Dict, List

from fletx.core import RxBool, RxList, RxStr

from storefront.shared.core import events
from storefront.shared.core.event_bus import EventBus, EventPayload

MAX_LOG_ENTRIES = 100


class ShellState:
    """Reactive state for the shell chrome.

    The log feed is capped at ``MAX_LOG_ENTRIES``; the oldest entries are
    dropped first.
    """

    def __init__(self, event_bus: EventBus) -> None:
        """Initialize shell state.

        Args:
            event_bus: The shared event bus
        """
        self.bus = event_bus

        # Navigation
        self.nav_items: RxList[Dict[str, str]] = RxList([
            {"id": "catalog", "label": "Shop", "icon": "storefront"},
            {"id": "cart", "label": "Cart", "icon": "shopping_cart"},
            {"id": "profile", "label": "Profile", "icon": "person"},
        ])
        self.nav_selected: RxStr = RxStr("catalog")

        # Status & Readiness
        self.is_ready: RxBool = RxBool(False)
        self.status_text: RxStr = RxStr("Starting...")

        # Log entries (each is a dict: {message, level, ts})
        self.logs: RxList[Dict[str, Any]] = RxList([])

        self._started = False

    async def initialize(self) -> None:
        """Bind to EventBus topics. Safe to call more than once."""
        if self._started:
            return

        await self.bus.subscribe(events.TOPIC_CATALOG_FETCH_START, self._handle_fetch_start)
        await self.bus.subscribe(events.TOPIC_CATALOG_LOADED, self._handle_catalog_loaded)
        await self.bus.subscribe(events.TOPIC_CATALOG_FAILED, self._handle_catalog_failed)
        await self.bus.subscribe(events.TOPIC_ORDER_PLACED, self._handle_order_placed)

        self._started = True
        self.is_ready.value = True

    # --- Public Actions ---

    def set_nav(self, route_id: str) -> None:
        self.nav_selected.value = route_id

    # --- Event Handlers ---

    def _append_log(self, message: str, level: str, ts: float | None = None) -> None:
        entries: List[Dict[str, Any]] = list(self.logs.value)
        entries.append({"message": message, "level": level, "ts": ts or time.time()})
        self.logs.value = entries[-MAX_LOG_ENTRIES:]

    async def _handle_fetch_start(self, payload: EventPayload) -> None:
        self.status_text.value = "Loading products..."

    async def _handle_catalog_loaded(self, payload: EventPayload) -> None:
        count = payload.get("product_count", 0)
        self.status_text.value = f"{count} products"
        self._append_log(f"Loaded {count} products", "success")

    async def _handle_catalog_failed(self, payload: EventPayload) -> None:
        message = payload.get("message", "Failed to load products")
        self.status_text.value = "Could not load products"
        self._append_log(message, "error")

    async def _handle_order_placed(self, payload: EventPayload) -> None:
        summary = payload.get("summary", {})
        self.status_text.value = "Order placed successfully!"
        self._append_log(
            f"Order placed: {summary.get('item_count', 0)} item(s), total {summary.get('total', 0):.2f}",
            "success",
            payload.get("ts"),
        )
