"""Domain errors raised by helpers and turned into flash messages by routes."""


class NestSweetsError(Exception):
    """Base class for storefront errors."""


class CheckoutError(NestSweetsError):
    """Order cannot be placed as submitted."""


class OutOfStock(CheckoutError):
    """Not enough stock for a cart line."""

    def __init__(self, product_name, requested, available):
        self.product_name = product_name
        self.requested = requested
        self.available = available
        super().__init__(
            f'Only {available} left of {product_name} (requested {requested}).'
        )
