"""
Shared Domain Module
====================

Business records and pure logic: catalog products, filtering, cart lines and
checkout arithmetic. Nothing in here touches the network or the UI.
"""

from .cart import CartLine, CheckoutSummary, EmptyCartError
from .catalog import ALL_CATEGORIES, Product, Rating, derive_categories, filter_products

__all__ = [
    "ALL_CATEGORIES",
    "CartLine",
    "CheckoutSummary",
    "EmptyCartError",
    "Product",
    "Rating",
    "derive_categories",
    "filter_products",
]
