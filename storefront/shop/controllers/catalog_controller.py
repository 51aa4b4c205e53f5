"""Controller for the product listing screen."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List

import flet as ft

from storefront.shared.domain.catalog import Product
from storefront.shop.ui.theme import (
    BG_IMAGE_TILE, EMPTY_STATE_ICON, GRID_ASPECT_RATIO, GRID_MAX_EXTENT,
    IN_CART_BADGE, PRICE_TEXT, RATING_ICON, RED_ERROR, TEXT_MUTED, TEXT_SUBTLE,
    format_price,
)

if TYPE_CHECKING:
    from storefront.shop.state import Store

logger = logging.getLogger(__name__)


class CatalogController:
    """Builds the shop screen and keeps it in sync with the catalog and cart."""

    def __init__(self, store: Store, page: ft.Page):
        self.store = store
        self.page = page
        self._subscriptions = []

        self.search_field = ft.TextField(
            hint_text="Search products...",
            prefix_icon=ft.Icons.SEARCH,
            border_radius=28,
            dense=True,
            on_change=self._on_search_change,
        )
        self.view_toggle = ft.IconButton(on_click=lambda e: self.store.catalog.toggle_grid_view())
        self.refresh_button = ft.IconButton(icon=ft.Icons.REFRESH, tooltip="Refresh", on_click=self._on_refresh)
        self.category_row = ft.Row(scroll=ft.ScrollMode.AUTO, spacing=8)
        self.body = ft.Container(expand=True)

    def bind(self) -> None:
        """Subscribe to the stores this screen renders."""
        self._subscriptions = [
            (self.store.catalog, self.store.catalog.subscribe(self._sync)),
            (self.store.cart, self.store.cart.subscribe(self._sync)),
            (self.store.preferences, self.store.preferences.subscribe(self._sync)),
        ]

    def cleanup(self) -> None:
        for state, handle in self._subscriptions:
            state.unsubscribe(handle)
        self._subscriptions = []

    def build_view(self) -> ft.Control:
        self._sync(update=False)
        return ft.Container(
            expand=True,
            padding=ft.padding.only(left=16, right=16, top=12),
            content=ft.Column(
                [
                    ft.Row([ft.Container(self.search_field, expand=True), self.refresh_button, self.view_toggle]),
                    self.category_row,
                    self.body,
                ],
                spacing=12,
                expand=True,
            ),
        )

    # --- Events ---

    def _on_search_change(self, e: ft.ControlEvent) -> None:
        self.store.catalog.set_search_text(e.control.value or "")

    async def _on_refresh(self, e: ft.ControlEvent) -> None:
        await self.store.catalog.fetch_products()

    # --- Rendering ---

    def _sync(self, update: bool = True) -> None:
        catalog = self.store.catalog
        grid = catalog.is_grid_view
        self.view_toggle.icon = ft.Icons.VIEW_LIST if grid else ft.Icons.GRID_VIEW
        self.view_toggle.tooltip = "List view" if grid else "Grid view"
        self.refresh_button.disabled = catalog.is_loading.value

        selected = catalog.selected_category.value
        self.category_row.controls = [
            ft.Chip(
                label=ft.Text(category),
                selected=category == selected,
                on_select=lambda e, c=category: self.store.catalog.set_category(c),
            )
            for category in catalog.categories.value
        ]

        self.body.content = self._render_body(catalog.products.value, grid)
        if update:
            try:
                self.page.update()
            except RuntimeError:
                # Session destroyed, ignore update
                pass

    def _render_body(self, products: List[Product], grid: bool) -> ft.Control:
        catalog = self.store.catalog
        if catalog.is_loading.value and not catalog.all_products.value:
            return ft.Container(alignment=ft.Alignment(0, 0), content=ft.ProgressRing())

        if catalog.last_error and not catalog.all_products.value:
            return ft.Column(
                [
                    ft.Icon(ft.Icons.CLOUD_OFF, size=64, color=RED_ERROR),
                    ft.Text(catalog.last_error, color=RED_ERROR, text_align=ft.TextAlign.CENTER),
                    ft.FilledButton("Retry", on_click=self._on_refresh),
                ],
                horizontal_alignment=ft.CrossAxisAlignment.CENTER,
                alignment=ft.MainAxisAlignment.CENTER,
                expand=True,
            )

        if not products:
            listing = ft.Column(
                [
                    ft.Icon(ft.Icons.SEARCH_OFF, size=64, color=EMPTY_STATE_ICON),
                    ft.Text("No products found", color=TEXT_MUTED),
                ],
                horizontal_alignment=ft.CrossAxisAlignment.CENTER,
                alignment=ft.MainAxisAlignment.CENTER,
                expand=True,
            )
        else:
            listing = self._render_listing(products, grid)
        if catalog.last_error:
            # Refresh failed; the previous products stay on screen
            return ft.Column([self._error_banner(catalog.last_error), listing], spacing=8, expand=True)
        return listing

    def _error_banner(self, message: str) -> ft.Control:
        return ft.Container(
            padding=ft.padding.symmetric(horizontal=12, vertical=4),
            border_radius=8,
            border=ft.border.all(1, RED_ERROR),
            content=ft.Row(
                [
                    ft.Icon(ft.Icons.ERROR_OUTLINE, color=RED_ERROR),
                    ft.Text(message, color=RED_ERROR, expand=True),
                    ft.TextButton("Retry", on_click=self._on_refresh),
                ],
            ),
        )

    def _render_listing(self, products: List[Product], grid: bool) -> ft.Control:
        cards = [self._product_card(product, list_view=not grid) for product in products]
        if grid:
            return ft.GridView(
                controls=cards,
                max_extent=GRID_MAX_EXTENT,
                child_aspect_ratio=GRID_ASPECT_RATIO,
                spacing=12,
                run_spacing=12,
                expand=True,
            )
        return ft.ListView(controls=cards, spacing=8, expand=True)

    def _product_card(self, product: Product, list_view: bool) -> ft.Control:
        cart = self.store.cart
        in_cart = cart.contains(product)
        symbol = self.store.config.checkout.currency_symbol

        image = ft.Container(
            bgcolor=BG_IMAGE_TILE,
            border_radius=8,
            padding=8,
            width=96 if list_view else None,
            height=96 if list_view else 140,
            content=ft.Image(src=product.image_url, fit=ft.ImageFit.CONTAIN),
        )
        details = ft.Column(
            [
                ft.Text(product.title, max_lines=2, overflow=ft.TextOverflow.ELLIPSIS, weight=ft.FontWeight.W_500),
                ft.Row(
                    [
                        ft.Icon(ft.Icons.STAR, size=14, color=RATING_ICON),
                        ft.Text(f"{product.rating.rate:.1f}", size=12),
                        ft.Text(f"({product.rating.count})", size=12, color=TEXT_SUBTLE),
                    ],
                    spacing=4,
                ),
                ft.Row(
                    [
                        ft.Text(format_price(product.price, symbol), color=PRICE_TEXT, weight=ft.FontWeight.BOLD),
                        ft.IconButton(
                            icon=ft.Icons.CHECK_CIRCLE if in_cart else ft.Icons.ADD_SHOPPING_CART,
                            icon_color=IN_CART_BADGE if in_cart else None,
                            tooltip=f"In cart ({cart.quantity_of(product)})" if in_cart else "Add to cart",
                            on_click=lambda e, p=product: self.store.cart.add_to_cart(p),
                        ),
                    ],
                    alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
                ),
            ],
            spacing=4,
            expand=list_view,
        )
        layout = ft.Row([image, details], spacing=12) if list_view else ft.Column([image, details], spacing=8)
        return ft.Card(content=ft.Container(padding=8, content=layout))
