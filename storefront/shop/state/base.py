"""Shared plumbing for the reactive stores."""

from __future__ import annotations

import logging
from typing import Callable, List

from fletx.core import RxInt

from storefront.shared.core.event_bus import EventBus

logger = logging.getLogger(__name__)


class ReactiveState:
    """Base class giving every store a change counter and subscriptions.

    Fine-grained Rx fields on the subclasses notify their own listeners as
    they are assigned. ``revision`` is bumped exactly once at the end of every
    state-changing operation, so ``subscribe`` callbacks fire once per
    operation regardless of how many fields it touched.
    """

    def __init__(self, event_bus: EventBus) -> None:
        self.bus = event_bus
        self.revision: RxInt = RxInt(0)
        self._observers: List = []

    def subscribe(self, callback: Callable[[], None]):
        """Call ``callback`` (no arguments) after each state change.

        Returns:
            A handle to pass to ``unsubscribe``
        """
        observer = self.revision.listen(callback)
        self._observers.append(observer)
        return observer

    def unsubscribe(self, handle) -> None:
        """Stop notifications for a handle returned by ``subscribe``."""
        if handle in self._observers:
            self._observers.remove(handle)
            handle.dispose()

    def dispose(self) -> None:
        """Detach every subscriber; the store stays readable afterwards."""
        for observer in self._observers:
            observer.dispose()
        logger.debug(f"{type(self).__name__}: disposed {len(self._observers)} subscriber(s)")
        self._observers.clear()

    def _changed(self) -> None:
        self.revision.value = self.revision.value + 1
