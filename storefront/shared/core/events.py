"""Canonical event topics and payload builders for the storefront."""

from __future__ import annotations

import time
from typing import Any, Dict

from .event_bus import EventPayload

# Catalog lifecycle
TOPIC_CATALOG_FETCH_START = "catalog.fetch.start"
TOPIC_CATALOG_LOADED = "catalog.loaded"
TOPIC_CATALOG_FAILED = "catalog.failed"

# Checkout
TOPIC_ORDER_PLACED = "order.placed"


def create_catalog_fetch_start_event(generation: int) -> EventPayload:
    return {
        "generation": generation,
    }


def create_catalog_loaded_event(generation: int, product_count: int, category_count: int) -> EventPayload:
    """Create a catalog loaded event.

    Args:
        generation: Request generation that produced the data
        product_count: Number of products received
        category_count: Number of distinct categories (sentinel excluded)
    """
    return {
        "generation": generation,
        "product_count": product_count,
        "category_count": category_count,
    }


def create_catalog_failed_event(generation: int, message: str, kind: str) -> EventPayload:
    """Create a catalog failed event.

    Args:
        generation: Request generation that failed
        message: Human-readable error shown to the user
        kind: Failure kind ("network", "bad_status", "invalid_url" or "parse")
    """
    return {
        "generation": generation,
        "message": message,
        "kind": kind,
    }


def create_order_placed_event(summary: Dict[str, Any]) -> EventPayload:
    """Create an order placed event carrying the checkout summary."""
    return {
        "summary": summary,
        "ts": time.time(),
    }
