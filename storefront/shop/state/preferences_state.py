"""Session-only view preferences: grid/list layout and theme mode."""

from __future__ import annotations

from enum import Enum

from fletx.core import RxStr

from storefront.shared.core.event_bus import EventBus
from .base import ReactiveState


class ViewMode(str, Enum):
    GRID = "grid"
    LIST = "list"


class ThemeMode(str, Enum):
    LIGHT = "light"
    DARK = "dark"
    SYSTEM = "system"


class PreferencesState(ReactiveState):
    """Two independent settings with change notification.

    Unknown values raise ``ValueError``; assigning the current value is a
    no-op and does not notify.
    """

    def __init__(
        self,
        event_bus: EventBus,
        view_mode: ViewMode | str = ViewMode.GRID,
        theme_mode: ThemeMode | str = ThemeMode.SYSTEM,
    ) -> None:
        super().__init__(event_bus)
        self.view_mode: RxStr = RxStr(ViewMode(view_mode).value)
        self.theme_mode: RxStr = RxStr(ThemeMode(theme_mode).value)

    @property
    def is_grid_view(self) -> bool:
        return self.view_mode.value == ViewMode.GRID.value

    def set_view_mode(self, mode: ViewMode | str) -> None:
        value = ViewMode(mode).value
        if value == self.view_mode.value:
            return
        self.view_mode.value = value
        self._changed()

    def toggle_view_mode(self) -> None:
        self.set_view_mode(ViewMode.LIST if self.is_grid_view else ViewMode.GRID)

    def set_theme_mode(self, mode: ThemeMode | str) -> None:
        value = ThemeMode(mode).value
        if value == self.theme_mode.value:
            return
        self.theme_mode.value = value
        self._changed()
