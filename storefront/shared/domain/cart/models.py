"""Cart lines and the checkout summary derived from them."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable

from storefront.shared.domain.catalog.models import Product


class EmptyCartError(Exception):
    """Checkout was requested for a cart with no lines."""


@dataclass
class CartLine:
    """One product in the cart and how many of it.

    Holds the product by reference; the cart never stores a line with a
    quantity below 1.
    """

    product: Product
    quantity: int = 1

    @property
    def subtotal(self) -> float:
        return self.product.price * self.quantity


@dataclass(frozen=True)
class CheckoutSummary:
    """Order summary shown in the checkout sheet."""

    subtotal: float
    shipping: float
    tax: float
    total: float
    item_count: int
    currency_symbol: str = "$"

    @property
    def is_free_shipping(self) -> bool:
        return self.shipping == 0

    def format_amount(self, amount: float) -> str:
        return f"{self.currency_symbol}{amount:.2f}"

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        for key in ("subtotal", "shipping", "tax", "total"):
            data[key] = round(data[key], 2)
        return data

    @classmethod
    def from_lines(
        cls,
        lines: Iterable[CartLine],
        tax_rate: float,
        shipping_fee: float = 0.0,
        currency_symbol: str = "$",
    ) -> "CheckoutSummary":
        """Build the summary from cart lines.

        Tax is charged on the subtotal only; shipping is added on top.
        """
        lines = list(lines)
        subtotal = sum(line.subtotal for line in lines)
        item_count = sum(line.quantity for line in lines)
        shipping = shipping_fee if lines else 0.0
        tax = subtotal * tax_rate
        return cls(
            subtotal=subtotal,
            shipping=shipping,
            tax=tax,
            total=subtotal + shipping + tax,
            item_count=item_count,
            currency_symbol=currency_symbol,
        )
