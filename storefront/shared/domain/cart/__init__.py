from .models import CartLine, CheckoutSummary, EmptyCartError

__all__ = ["CartLine", "CheckoutSummary", "EmptyCartError"]
