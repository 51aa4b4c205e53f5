"""Controller for the cart screen and the checkout bottom sheet."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import flet as ft

from storefront.shared.domain.cart import CartLine, EmptyCartError
from storefront.shop.ui.theme import (
    BG_IMAGE_TILE, BG_SHEET_HANDLE, CART_THUMB_SIZE, EMPTY_STATE_ICON,
    PRICE_TEXT, RED_ERROR, SNACKBAR_SUCCESS, TEXT_MUTED,
)

if TYPE_CHECKING:
    from storefront.shop.state import Store

logger = logging.getLogger(__name__)


class CartController:
    """Renders cart lines with quantity steppers and runs checkout."""

    def __init__(self, store: Store, page: ft.Page):
        self.store = store
        self.page = page
        self._handle = None
        self.body = ft.Container(expand=True)
        self.clear_button = ft.TextButton("Clear", on_click=self._confirm_clear)
        self.clear_dialog = ft.AlertDialog(
            title=ft.Text("Clear Cart"),
            content=ft.Text("Are you sure you want to clear all items from your cart?"),
            actions=[
                ft.TextButton("Cancel", on_click=lambda e: self._hide(self.clear_dialog)),
                ft.FilledButton("Clear", on_click=self._on_clear_confirmed),
            ],
        )
        self.checkout_sheet = ft.BottomSheet(ft.Container())
        self.order_snack = ft.SnackBar(ft.Text("Order placed successfully!"), bgcolor=SNACKBAR_SUCCESS)

    def bind(self) -> None:
        self._handle = self.store.cart.subscribe(self._sync)

    def cleanup(self) -> None:
        if self._handle is not None:
            self.store.cart.unsubscribe(self._handle)
            self._handle = None

    def build_view(self) -> ft.Control:
        self._sync(update=False)
        return ft.Container(
            expand=True,
            padding=16,
            content=ft.Column(
                [
                    ft.Row(
                        [ft.Text("Shopping Cart", size=22, weight=ft.FontWeight.W_700), self.clear_button],
                        alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
                    ),
                    self.body,
                ],
                expand=True,
            ),
        )

    # --- Rendering ---

    def _sync(self, update: bool = True) -> None:
        cart = self.store.cart
        self.clear_button.visible = not cart.is_empty
        if cart.is_empty:
            self.body.content = ft.Column(
                [
                    ft.Icon(ft.Icons.SHOPPING_CART_OUTLINED, size=128, color=EMPTY_STATE_ICON),
                    ft.Text("Your cart is empty", size=20),
                    ft.Text("Add some products to get started", color=TEXT_MUTED),
                ],
                horizontal_alignment=ft.CrossAxisAlignment.CENTER,
                alignment=ft.MainAxisAlignment.CENTER,
                expand=True,
            )
        else:
            summary = cart.checkout_summary()
            self.body.content = ft.Column(
                [
                    ft.ListView(controls=[self._line_tile(line) for line in cart.lines], spacing=12, expand=True),
                    ft.Divider(),
                    ft.Row(
                        [
                            ft.Text(f"Total ({summary.item_count} items)", size=16),
                            ft.Text(summary.format_amount(summary.subtotal), size=20, color=PRICE_TEXT, weight=ft.FontWeight.BOLD),
                        ],
                        alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
                    ),
                    ft.FilledButton("Checkout", height=52, width=float("inf"), on_click=self._open_checkout),
                ],
                expand=True,
            )
        if update:
            try:
                self.page.update()
            except RuntimeError:
                pass

    def _line_tile(self, line: CartLine) -> ft.Control:
        cart = self.store.cart
        product = line.product
        symbol = self.store.config.checkout.currency_symbol
        return ft.Card(
            content=ft.Container(
                padding=12,
                content=ft.Row(
                    [
                        ft.Container(
                            width=CART_THUMB_SIZE,
                            height=CART_THUMB_SIZE,
                            bgcolor=BG_IMAGE_TILE,
                            border_radius=8,
                            padding=4,
                            content=ft.Image(src=product.image_url, fit=ft.ImageFit.CONTAIN),
                        ),
                        ft.Column(
                            [
                                ft.Text(product.title, max_lines=2, overflow=ft.TextOverflow.ELLIPSIS),
                                ft.Text(f"{symbol}{line.subtotal:.2f}", color=PRICE_TEXT, weight=ft.FontWeight.BOLD),
                                ft.Row(
                                    [
                                        ft.IconButton(
                                            ft.Icons.REMOVE,
                                            on_click=lambda e, l=line: cart.update_quantity(l.product, l.quantity - 1),
                                        ),
                                        ft.Text(str(line.quantity)),
                                        ft.IconButton(
                                            ft.Icons.ADD,
                                            on_click=lambda e, l=line: cart.update_quantity(l.product, l.quantity + 1),
                                        ),
                                    ],
                                    spacing=0,
                                ),
                            ],
                            expand=True,
                            spacing=4,
                        ),
                        ft.IconButton(
                            ft.Icons.DELETE_OUTLINE,
                            icon_color=RED_ERROR,
                            tooltip="Remove",
                            on_click=lambda e, p=product: cart.remove_from_cart(p),
                        ),
                    ],
                    spacing=12,
                ),
            ),
        )

    # --- Overlays ---

    def _show(self, control: ft.Control) -> None:
        # Overlay controls are created once and reopened
        if control not in self.page.overlay:
            self.page.overlay.append(control)
        control.open = True
        self.page.update()

    def _hide(self, control: ft.Control) -> None:
        control.open = False
        self.page.update()

    # --- Clear dialog ---

    def _confirm_clear(self, e: ft.ControlEvent) -> None:
        self._show(self.clear_dialog)

    def _on_clear_confirmed(self, e: ft.ControlEvent) -> None:
        self.store.cart.clear_cart()
        self._hide(self.clear_dialog)

    # --- Checkout sheet ---

    def _open_checkout(self, e: ft.ControlEvent) -> None:
        summary = self.store.cart.checkout_summary()

        def row(label: str, value: str, emphasize: bool = False) -> ft.Row:
            size = 20 if emphasize else 15
            return ft.Row(
                [
                    ft.Text(label, size=size),
                    ft.Text(
                        value,
                        size=size,
                        color=PRICE_TEXT if emphasize or value == "Free" else None,
                        weight=ft.FontWeight.BOLD if emphasize else None,
                    ),
                ],
                alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
            )

        shipping = "Free" if summary.is_free_shipping else summary.format_amount(summary.shipping)
        self.checkout_sheet.content = ft.Container(
            padding=24,
            content=ft.Column(
                [
                    ft.Container(width=40, height=4, bgcolor=BG_SHEET_HANDLE, border_radius=2),
                    ft.Text("Order Summary", size=22),
                    row("Subtotal", summary.format_amount(summary.subtotal)),
                    row("Shipping", shipping),
                    row("Tax", summary.format_amount(summary.tax)),
                    ft.Divider(height=24),
                    row("Total", summary.format_amount(summary.total), emphasize=True),
                    ft.FilledButton("Place Order", height=56, width=float("inf"), on_click=self._place_order),
                    ft.TextButton(
                        "Continue Shopping",
                        width=float("inf"),
                        on_click=lambda e: self._hide(self.checkout_sheet),
                    ),
                ],
                tight=True,
                horizontal_alignment=ft.CrossAxisAlignment.CENTER,
            ),
        )
        self._show(self.checkout_sheet)

    async def _place_order(self, e: ft.ControlEvent) -> None:
        self._hide(self.checkout_sheet)
        try:
            await self.store.cart.place_order()
        except EmptyCartError:
            logger.warning("Checkout attempted with an empty cart")
            return
        self._show(self.order_snack)
