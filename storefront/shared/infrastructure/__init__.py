"""
Shared Infrastructure Module
=============================

Technical adapters for external systems (the remote product catalog).
"""

from storefront.shared.infrastructure.catalog_client import (
    BadStatusError,
    CatalogClient,
    CatalogParseError,
    FetchError,
    InvalidEndpointError,
    NetworkError,
    parse_products,
)

__all__ = [
    "BadStatusError",
    "CatalogClient",
    "CatalogParseError",
    "FetchError",
    "InvalidEndpointError",
    "NetworkError",
    "parse_products",
]
