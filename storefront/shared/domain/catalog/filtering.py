"""Pure derivations over the product list.

Nothing here holds state: the catalog store calls these with its current
snapshot every time the category, the search text or the products change.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence

from .models import Product

ALL_CATEGORIES = "All"


def filter_products(
    products: Sequence[Product],
    category: str = ALL_CATEGORIES,
    search_text: str = "",
) -> List[Product]:
    """Return the products matching both the category and the search text.

    Args:
        products: Full catalog in server order
        category: Category to keep, or ``ALL_CATEGORIES`` for every category
        search_text: Substring matched case-insensitively against title or
            description; empty matches everything

    Returns:
        A new list preserving the input order
    """
    return [
        product
        for product in products
        if (category == ALL_CATEGORIES or product.category == category)
        and product.matches_search(search_text)
    ]


def derive_categories(products: Iterable[Product]) -> List[str]:
    """Sentinel first, then the distinct categories sorted alphabetically."""
    return [ALL_CATEGORIES, *sorted({product.category for product in products})]
