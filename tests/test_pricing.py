from nestsweets.models.settings import DEFAULT_SETTINGS
from nestsweets.utils.pricing import (
    amount_for_free_delivery,
    calculate_delivery_fee,
    calculate_order_total,
    calculate_tax,
    format_whatsapp_number,
    get_currency_symbol,
    is_pincode_allowed,
)


def test_currency_symbol():
    assert get_currency_symbol('INR') == '₹'
    assert get_currency_symbol('CAD') == '$'
    assert get_currency_symbol('XYZ') == '₹'


def test_delivery_fee_free_at_threshold():
    settings = dict(DEFAULT_SETTINGS)
    assert calculate_delivery_fee(499, settings) == 50
    assert calculate_delivery_fee(500, settings) == 0
    assert calculate_delivery_fee(1200, settings) == 0


def test_tax_applies_to_subtotal_only():
    settings = dict(DEFAULT_SETTINGS, tax_rate=5, free_delivery_above=1000)
    totals = calculate_order_total(600, settings)
    assert totals == {'subtotal': 600, 'delivery_fee': 50.0, 'tax': 30.0, 'total': 680.0}
    assert calculate_tax(100, None) == 0


def test_order_total_without_delivery():
    settings = dict(DEFAULT_SETTINGS, free_delivery_above=1000)
    assert calculate_order_total(600, settings, include_delivery=False)['total'] == 600


def test_pincode_rules():
    assert is_pincode_allowed('126152', '')
    assert is_pincode_allowed('126152', '126152, 126153')
    assert not is_pincode_allowed('110001', '126152, 126153')
    assert not is_pincode_allowed('', '126152')


def test_amount_for_free_delivery():
    settings = dict(DEFAULT_SETTINGS)
    assert amount_for_free_delivery(350, settings) == 150
    assert amount_for_free_delivery(800, settings) == 0


def test_whatsapp_number_digits_only():
    assert format_whatsapp_number('+91 98765-43210') == '919876543210'
    assert format_whatsapp_number(None) == ''
