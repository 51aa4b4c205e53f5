"""Controller for the profile screen (appearance settings live here)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import flet as ft

from storefront.shop.state.preferences_state import ThemeMode, ViewMode
from storefront.shop.ui.theme import TEXT_MUTED

if TYPE_CHECKING:
    from storefront.shop.state import Store


class ProfileController:
    """Theme and layout preferences for the current session."""

    def __init__(self, store: Store, page: ft.Page):
        self.store = store
        self.page = page

    def build_view(self) -> ft.Control:
        prefs = self.store.preferences

        theme_group = ft.RadioGroup(
            value=prefs.theme_mode.value,
            on_change=lambda e: prefs.set_theme_mode(e.control.value),
            content=ft.Column(
                [ft.Radio(value=mode.value, label=mode.value.capitalize()) for mode in ThemeMode]
            ),
        )
        view_switch = ft.Switch(
            label="Grid layout",
            value=prefs.is_grid_view,
            on_change=lambda e: prefs.set_view_mode(ViewMode.GRID if e.control.value else ViewMode.LIST),
        )

        return ft.Container(
            expand=True,
            padding=16,
            content=ft.Column(
                [
                    ft.Row(
                        [
                            ft.CircleAvatar(content=ft.Icon(ft.Icons.PERSON), radius=32),
                            ft.Column([ft.Text("Guest", size=20), ft.Text("Session only", color=TEXT_MUTED)]),
                        ],
                        spacing=16,
                    ),
                    ft.Divider(),
                    ft.Text("Theme", weight=ft.FontWeight.W_600),
                    theme_group,
                    ft.Divider(),
                    view_switch,
                ],
                spacing=12,
                scroll=ft.ScrollMode.AUTO,
            ),
        )
