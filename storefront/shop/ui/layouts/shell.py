from __future__ import annotations

import datetime
from typing import List

import flet as ft

from storefront.shared.core.service_registry import register_cleanup_handler
from storefront.shop.controllers.cart_controller import CartController
from storefront.shop.controllers.catalog_controller import CatalogController
from storefront.shop.controllers.profile_controller import ProfileController
from storefront.shop.state import Store
from storefront.shop.ui.theme import TEXT_MUTED, get_log_color

THEME_MODES = {
    "light": ft.ThemeMode.LIGHT,
    "dark": ft.ThemeMode.DARK,
    "system": ft.ThemeMode.SYSTEM,
}


def apply_shell_theme(page: ft.Page, store: Store) -> None:
    """Material 3 light/dark themes seeded from the configured color."""
    seed = store.config.ui.seed_color
    page.theme = ft.Theme(color_scheme_seed=seed, use_material3=True)
    page.dark_theme = ft.Theme(color_scheme_seed=seed, use_material3=True)
    page.theme_mode = THEME_MODES[store.preferences.theme_mode.value]
    page.padding = 0


def _nav_icon(item: dict) -> ft.IconValue:
    icon_name = str(item.get("icon", "storefront")).upper()
    return getattr(ft.Icons, icon_name, ft.Icons.STOREFRONT)


def _rail_destinations(items: List[dict]) -> List[ft.NavigationRailDestination]:
    return [ft.NavigationRailDestination(icon=_nav_icon(item), label=item.get("label", "")) for item in items]


def _bar_destinations(items: List[dict], cart_count: int) -> List[ft.NavigationBarDestination]:
    destinations: List[ft.NavigationBarDestination] = []
    for item in items:
        badge = str(cart_count) if item.get("id") == "cart" and cart_count else None
        destinations.append(
            ft.NavigationBarDestination(icon=_nav_icon(item), label=item.get("label", ""), badge=badge)
        )
    return destinations


def build_shell(page: ft.Page, store: Store) -> ft.View:
    apply_shell_theme(page, store)

    catalog_controller = CatalogController(store, page)
    cart_controller = CartController(store, page)
    profile_controller = ProfileController(store, page)
    catalog_controller.bind()
    cart_controller.bind()
    register_cleanup_handler(catalog_controller.cleanup)
    register_cleanup_handler(cart_controller.cleanup)

    views = {
        "catalog": catalog_controller.build_view,
        "cart": cart_controller.build_view,
        "profile": profile_controller.build_view,
    }
    content_container = ft.Container(expand=True, content=views["catalog"]())

    status_text = ft.Text(store.app.status_text.value, color=TEXT_MUTED, size=12)
    loading_bar = ft.ProgressBar(visible=False)
    items = store.app.nav_items.value
    is_tablet = (page.width or 0) > store.config.ui.tablet_breakpoint

    def _select(index: int) -> None:
        if 0 <= index < len(items):
            nav_id = items[index].get("id", "catalog")
            store.app.set_nav(nav_id)
            content_container.content = views[nav_id]()
            page.update()

    nav_rail = ft.NavigationRail(
        label_type=ft.NavigationRailLabelType.ALL,
        destinations=_rail_destinations(items),
        selected_index=0,
        on_change=lambda e: _select(e.control.selected_index),
        visible=is_tablet,
    )
    nav_bar = ft.NavigationBar(
        destinations=_bar_destinations(items, store.cart.total_items),
        selected_index=0,
        on_change=lambda e: _select(e.control.selected_index),
        visible=not is_tablet,
    )

    # --- Listener Bindings ---

    def _sync_status() -> None:
        status_text.value = store.app.status_text.value
        page.update()

    def _sync_loading() -> None:
        loading_bar.visible = store.catalog.is_loading.value
        page.update()

    def _sync_badge() -> None:
        nav_bar.destinations = _bar_destinations(items, store.cart.item_count.value)
        page.update()

    def _sync_theme() -> None:
        page.theme_mode = THEME_MODES[store.preferences.theme_mode.value]
        page.update()

    error_snack = ft.SnackBar(ft.Text(""), bgcolor=get_log_color("error"))
    page.overlay.append(error_snack)

    def _sync_logs() -> None:
        # Failures get a snack bar, everything else stays in the status line
        entries = store.app.logs.value
        if entries and entries[-1].get("level") == "error":
            last = entries[-1]
            stamp = datetime.datetime.fromtimestamp(last.get("ts", 0)).strftime("%H:%M:%S")
            error_snack.content = ft.Text(f"{stamp}  {last.get('message', '')}")
            error_snack.open = True
            page.update()

    store.app.status_text.listen(_sync_status)
    store.catalog.is_loading.listen(_sync_loading)
    store.cart.item_count.listen(_sync_badge)
    store.preferences.theme_mode.listen(_sync_theme)
    store.app.logs.listen(_sync_logs)

    chrome = ft.Row(
        [
            nav_rail,
            ft.VerticalDivider(width=1, visible=is_tablet),
            ft.Column(
                [
                    loading_bar,
                    ft.Container(status_text, padding=ft.padding.only(left=16, top=4)),
                    content_container,
                ],
                expand=True,
                spacing=0,
            ),
        ],
        expand=True,
    )

    return ft.View(
        route="/",
        controls=[chrome],
        navigation_bar=nav_bar,
        padding=0,
    )
