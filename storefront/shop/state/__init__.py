"""FletXr Reactive State Management for the storefront.

Architecture:
- ShellState: navigation, status line and log feed
- PreferencesState: grid/list view mode and theme mode
- CatalogState: fetched products, category + search filters, fetch lifecycle
- CartState: cart lines, totals, checkout
- Store: container constructed once at startup and passed to the UI
"""

from .cart_state import CartState
from .catalog_state import CatalogState, CatalogStatus
from .preferences_state import PreferencesState, ThemeMode, ViewMode
from .shell_state import ShellState
from .store import Store

__all__ = [
    "CartState",
    "CatalogState",
    "CatalogStatus",
    "PreferencesState",
    "ShellState",
    "Store",
    "ThemeMode",
    "ViewMode",
]
