"""Shopping cart store."""

from __future__ import annotations

import logging
from typing import Dict, List

from fletx.core import RxInt

from storefront.shared.core import events
from storefront.shared.core.configuration import CheckoutConfig
from storefront.shared.core.event_bus import EventBus
from storefront.shared.domain.cart import CartLine, CheckoutSummary, EmptyCartError
from storefront.shared.domain.catalog import Product
from .base import ReactiveState

logger = logging.getLogger(__name__)


class CartState(ReactiveState):
    """Reactive cart keyed by product id.

    Lines keep insertion order. Totals are recomputed on every read.
    ``item_count`` mirrors ``total_items`` as an Rx value for the nav badge.
    """

    def __init__(self, event_bus: EventBus, checkout: CheckoutConfig | None = None) -> None:
        super().__init__(event_bus)
        self.checkout = checkout or CheckoutConfig()
        self._lines: Dict[int, CartLine] = {}
        self.item_count: RxInt = RxInt(0)

    # --- Read helpers ---

    @property
    def lines(self) -> List[CartLine]:
        return list(self._lines.values())

    @property
    def is_empty(self) -> bool:
        return not self._lines

    @property
    def total_price(self) -> float:
        return sum(line.product.price * line.quantity for line in self._lines.values())

    @property
    def total_items(self) -> int:
        return sum(line.quantity for line in self._lines.values())

    def contains(self, product: Product) -> bool:
        return product.id in self._lines

    def quantity_of(self, product: Product) -> int:
        line = self._lines.get(product.id)
        return line.quantity if line else 0

    def checkout_summary(self) -> CheckoutSummary:
        return CheckoutSummary.from_lines(
            self._lines.values(),
            tax_rate=self.checkout.tax_rate,
            shipping_fee=self.checkout.shipping_fee,
            currency_symbol=self.checkout.currency_symbol,
        )

    # --- Public Actions ---

    def add_to_cart(self, product: Product) -> None:
        """Add one unit; an existing line for the same id is incremented."""
        line = self._lines.get(product.id)
        if line is not None:
            line.quantity += 1
        else:
            self._lines[product.id] = CartLine(product=product)
        self._changed()

    def remove_from_cart(self, product: Product) -> None:
        self._lines.pop(product.id, None)
        self._changed()

    def update_quantity(self, product: Product, quantity: int) -> None:
        """Set a line's quantity; ``quantity <= 0`` removes the line.

        Products not already in the cart are ignored, so a quantity stepper
        can never create a line.
        """
        line = self._lines.get(product.id)
        if line is None:
            logger.debug(f"update_quantity ignored for product {product.id}: not in cart")
            return
        if quantity <= 0:
            self.remove_from_cart(product)
            return
        line.quantity = quantity
        self._changed()

    def clear_cart(self) -> None:
        self._lines.clear()
        self._changed()

    async def place_order(self) -> CheckoutSummary:
        """Snapshot the summary, empty the cart and announce the order.

        Raises:
            EmptyCartError: The cart has no lines
        """
        if self.is_empty:
            raise EmptyCartError("Cannot place an order with an empty cart")

        summary = self.checkout_summary()
        self.clear_cart()
        logger.info(
            f"Order placed: {summary.item_count} item(s), total {summary.format_amount(summary.total)}"
        )
        await self.bus.publish(
            events.TOPIC_ORDER_PLACED,
            events.create_order_placed_event(summary.to_dict()),
        )
        return summary

    def _changed(self) -> None:
        self.item_count.value = self.total_items
        super()._changed()
