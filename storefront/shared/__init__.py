"""
Storefront Shared Kernel
========================

Business logic and infrastructure used by the storefront app.

Architecture:
- core: EventBus, event topics, configuration, cleanup registry
- infrastructure: Catalog HTTP client
- domain: Products, filtering, cart lines, checkout summary
"""

__version__ = "1.0.0"

__all__ = []
