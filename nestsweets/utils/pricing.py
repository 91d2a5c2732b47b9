"""Pricing helpers computed from the flat site settings record."""

import re

CURRENCY_SYMBOLS = {'CAD': '$'}


def get_currency_symbol(currency='INR'):
    return CURRENCY_SYMBOLS.get(currency, '₹')


def format_whatsapp_number(phone):
    """Strip everything but digits, as wa.me expects."""
    return re.sub(r'\D', '', phone or '')


def is_pincode_allowed(pincode, allowed_pincodes):
    """A blank allowed list accepts every pincode."""
    if not allowed_pincodes or not allowed_pincodes.strip():
        return True
    allowed = [p.strip() for p in allowed_pincodes.split(',') if p.strip()]
    return (pincode or '').strip() in allowed


def calculate_delivery_fee(order_total, settings):
    if order_total >= float(settings.get('free_delivery_above') or 0):
        return 0.0
    return float(settings.get('delivery_fee') or 0)


def calculate_tax(amount, tax_rate):
    return amount * float(tax_rate or 0) / 100


def calculate_order_total(subtotal, settings, include_delivery=True):
    """Break an order subtotal into fee, tax and grand total.

    Tax applies to the subtotal only.
    """
    delivery_fee = calculate_delivery_fee(subtotal, settings) if include_delivery else 0.0
    tax = calculate_tax(subtotal, settings.get('tax_rate'))
    return {
        'subtotal': subtotal,
        'delivery_fee': delivery_fee,
        'tax': tax,
        'total': subtotal + delivery_fee + tax,
    }


def amount_for_free_delivery(subtotal, settings):
    """How much more to spend before delivery becomes free (0 if already free)."""
    threshold = float(settings.get('free_delivery_above') or 0)
    return max(0.0, threshold - subtotal)
