from datetime import date, timedelta

import pytest

from nestsweets.extensions import db
from nestsweets.models import AdminNotification, Notification, Order, Product
from nestsweets.models.settings import load_site_settings, save_site_settings
from nestsweets.utils.cart import Cart
from nestsweets.utils.checkout import apply_status, cancel_order, place_order, validate_cart
from nestsweets.utils.exceptions import CheckoutError, OutOfStock
from conftest import make_product, make_user


def details(**overrides):
    data = {
        'customer_name': 'Asha Verma',
        'customer_phone': '9876543210',
        'customer_email': 'asha@example.com',
        'delivery_address': '12 Main Road',
        'delivery_pincode': '126152',
        'delivery_date': date.today() + timedelta(days=1),
        'delivery_time': 'evening',
        'payment_method': 'cod',
    }
    data.update(overrides)
    return data


def cart_lines(*adds):
    cart = Cart.from_session()
    for product, quantity in adds:
        cart.add(product, quantity)
    return cart.items()


def test_empty_cart_is_rejected(ctx):
    with pytest.raises(CheckoutError, match='empty'):
        validate_cart([], load_site_settings())


def test_minimum_order_enforced(ctx):
    lines = cart_lines((make_product(base_price=200), 1))
    with pytest.raises(CheckoutError, match='Minimum order amount is 500'):
        validate_cart(lines, load_site_settings())


def test_disabled_online_orders(ctx):
    save_site_settings({'enable_online_orders': False})
    lines = cart_lines((make_product(), 1))
    with pytest.raises(CheckoutError, match='disabled'):
        validate_cart(lines, load_site_settings())


def test_pincode_must_be_served(ctx):
    save_site_settings({'allowed_pincodes': '126152'})
    lines = cart_lines((make_product(), 1))
    assert validate_cart(lines, load_site_settings(), '126152') == 600
    with pytest.raises(CheckoutError, match='pincode 110001'):
        validate_cart(lines, load_site_settings(), '110001')


def test_stock_is_checked_across_lines(ctx):
    cake = make_product(stock=3)
    cart = Cart.from_session()
    cart.add(cake, 2, weight='0.5 kg')
    cart.add(cake, 2, weight='1 kg')
    with pytest.raises(OutOfStock) as excinfo:
        validate_cart(cart.items(), load_site_settings())
    assert excinfo.value.requested == 4
    assert excinfo.value.available == 3


def test_out_of_stock_flag(ctx):
    lines = cart_lines((make_product(in_stock=False), 1))
    with pytest.raises(OutOfStock):
        validate_cart(lines, load_site_settings())


def test_place_order_for_user(ctx):
    user = make_user()
    cake = make_product(stock=5)
    lines = cart_lines((cake, 2))

    order = place_order(lines, details(), load_site_settings(), user=user)

    assert order.order_ref.startswith('NSB')
    assert order.user_id == user.id
    assert not order.is_guest
    assert order.subtotal == 1200
    assert order.delivery_fee == 0
    assert order.total == 1200
    assert order.status == 'pending'
    assert order.items.count() == 1
    assert order.status_history.first().notes == 'Order placed'

    cake = db.session.get(Product, cake.id)
    assert cake.stock == 3
    assert cake.order_count == 2

    assert Notification.query.filter_by(user_id=user.id, type='order').count() == 1
    alert = AdminNotification.query.one()
    assert alert.type == 'new_order'
    assert alert.ref == order.order_ref


def test_guest_order_has_no_user_notification(ctx):
    lines = cart_lines((make_product(), 1))
    order = place_order(lines, details(), load_site_settings())
    assert order.is_guest
    assert Notification.query.count() == 0
    assert AdminNotification.query.count() == 1


def test_delivery_fee_below_threshold(ctx):
    save_site_settings({'minimum_order': 0})
    lines = cart_lines((make_product(base_price=300), 1))
    order = place_order(lines, details(), load_site_settings())
    assert order.delivery_fee == 50
    assert order.total == 350


def test_disabled_payment_method(ctx):
    save_site_settings({'enable_online_payment': False})
    lines = cart_lines((make_product(), 1))
    with pytest.raises(CheckoutError, match='Online payment'):
        place_order(lines, details(payment_method='online'), load_site_settings())
    assert Order.query.count() == 0


def test_apply_status_stamps(ctx):
    lines = cart_lines((make_product(), 1))
    order = place_order(lines, details(), load_site_settings())

    apply_status(order, 'confirmed')
    confirmed_at = order.confirmed_at
    assert confirmed_at is not None
    apply_status(order, 'confirmed', 'again')
    assert order.confirmed_at == confirmed_at

    apply_status(order, 'delivered')
    db.session.commit()
    assert order.delivered_at is not None
    assert order.payment_status == 'paid'
    assert [h.status for h in order.status_history] == ['pending', 'confirmed', 'confirmed', 'delivered']


def test_cancel_restores_stock(ctx):
    cake = make_product(stock=2)
    lines = cart_lines((cake, 2))
    order = place_order(lines, details(), load_site_settings())
    assert db.session.get(Product, cake.id).in_stock is False

    cancel_order(order, 'Changed my mind')
    db.session.commit()

    cake = db.session.get(Product, cake.id)
    assert cake.stock == 2
    assert cake.in_stock
    assert order.status == 'cancelled'
    assert order.cancel_reason == 'Changed my mind'

    with pytest.raises(CheckoutError, match='already cancelled'):
        cancel_order(order, by_admin=True)


def test_customer_cannot_cancel_after_preparing(ctx):
    lines = cart_lines((make_product(), 1))
    order = place_order(lines, details(), load_site_settings())
    apply_status(order, 'preparing')
    with pytest.raises(CheckoutError, match='no longer be cancelled'):
        cancel_order(order)
    cancel_order(order, 'Out of ingredients', by_admin=True)
    assert order.status == 'cancelled'


def test_cancelled_order_cannot_be_reopened(ctx):
    lines = cart_lines((make_product(), 1))
    order = place_order(lines, details(), load_site_settings())
    cancel_order(order, by_admin=True)
    with pytest.raises(CheckoutError, match='cannot be reopened'):
        apply_status(order, 'confirmed')
    assert order.status == 'cancelled'
