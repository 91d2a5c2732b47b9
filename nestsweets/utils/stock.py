"""Stock bookkeeping for products. A stock of None means untracked."""

import logging

logger = logging.getLogger(__name__)

LOW_STOCK_THRESHOLD = 10


def decrement_stock(product, quantity=1):
    """Take quantity out of stock.

    Returns (ok, warning, remaining) where warning is 'low_stock',
    'out_of_stock' or None. The caller commits.
    """
    if product is None:
        return False, None, None
    if product.stock is None:
        return True, None, None

    remaining = max(0, product.stock - quantity)
    product.stock = remaining

    if remaining == 0:
        product.in_stock = False
        logger.warning('Product %s is now out of stock', product.id)
        return True, 'out_of_stock', 0
    if remaining <= LOW_STOCK_THRESHOLD:
        logger.info('Product %s low on stock: %d left', product.id, remaining)
        return True, 'low_stock', remaining
    return True, None, remaining


def increment_stock(product, quantity=1):
    """Put quantity back into stock, e.g. after a cancellation."""
    if product is None or product.stock is None:
        return False
    product.stock += quantity
    if product.stock > 0:
        product.in_stock = True
    return True


def check_stock_availability(product, quantity=1):
    if product is None:
        return False
    if product.stock is None:
        return True
    return product.stock >= quantity
