from .filtering import ALL_CATEGORIES, derive_categories, filter_products
from .models import Product, Rating

__all__ = [
    "ALL_CATEGORIES",
    "Product",
    "Rating",
    "derive_categories",
    "filter_products",
]
