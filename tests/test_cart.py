from flask import session

from nestsweets.extensions import db
from nestsweets.models.settings import load_site_settings, save_site_settings
from nestsweets.utils.cart import SESSION_KEY, Cart, line_key
from nestsweets.utils.pricing import calculate_order_total
from nestsweets.utils.whatsapp import cart_message
from conftest import make_product


def test_line_key():
    assert line_key(3, '1 kg', 'Vanilla', ' Happy Birthday ') == '3|1 kg|Vanilla|Happy Birthday'
    assert line_key(3) == '3|||'


def test_identical_lines_merge(ctx):
    cake = make_product()
    cart = Cart.from_session()
    first = cart.add(cake, 1, weight='1 kg')
    second = cart.add(cake, 2, weight='1 kg')
    assert first == second
    assert len(cart) == 1
    assert cart.count == 3
    assert session[SESSION_KEY][0]['price'] == 1200


def test_different_options_are_separate_lines(ctx):
    cake = make_product()
    cart = Cart.from_session()
    cart.add(cake, 1, weight='0.5 kg')
    cart.add(cake, 1, weight='0.5 kg', customization='Happy Birthday Riya')
    cart.add(cake, 1, weight='1 kg')
    assert len(cart) == 3
    assert cart.total == 600 + 600 + 1200


def test_unknown_weight_uses_base_price(ctx):
    cake = make_product(base_price=700)
    cart = Cart.from_session()
    cart.add(cake, 2, weight='2 kg')
    assert cart.items()[0].subtotal == 1400


def test_update_and_remove(ctx):
    cake = make_product()
    cart = Cart.from_session()
    key = cart.add(cake, 1)
    assert cart.update(key, 4)
    assert cart.count == 4
    assert cart.update(key, 0)
    assert not cart
    assert cart.update('missing', 1) is False


def test_lines_for_deleted_products_are_dropped(ctx):
    keep = make_product('Red Velvet')
    gone = make_product('Black Forest')
    cart = Cart.from_session()
    cart.add(keep)
    cart.add(gone)
    db.session.delete(gone)
    db.session.commit()

    lines = cart.items()
    assert [line.name for line in lines] == ['Red Velvet']
    assert len(Cart.from_session()) == 1


def test_cart_routes(client, app, product_id):
    response = client.post('/cart/add', data={'product_id': product_id, 'quantity': 2, 'weight': '1 kg'})
    assert response.status_code == 302
    assert client.get('/api/cart/count').get_json() == {'cart_count': 2}

    key = f'{product_id}|1 kg||'
    client.post('/cart/update', data={'key': key, 'quantity': 5})
    assert client.get('/api/cart/count').get_json()['cart_count'] == 5

    page = client.get('/cart/')
    assert page.status_code == 200
    assert b'Chocolate Truffle' in page.data

    client.post('/cart/remove', data={'key': key})
    assert client.get('/api/cart/count').get_json()['cart_count'] == 0


def test_cannot_add_more_than_stock(client, app):
    with app.app_context():
        cake_id = make_product(stock=1).id
    client.post('/cart/add', data={'product_id': cake_id, 'quantity': 3})
    assert client.get('/api/cart/count').get_json()['cart_count'] == 0


def test_api_add_to_cart(client, app):
    with app.app_context():
        cake_id = make_product(stock=2).id
        sold_out_id = make_product('Sold Out', in_stock=False).id

    ok = client.post('/api/cart/add', json={'product_id': cake_id, 'quantity': 1})
    assert ok.get_json()['success'] is True
    assert ok.get_json()['cart_count'] == 1

    too_many = client.post('/api/cart/add', json={'product_id': cake_id, 'quantity': 5})
    assert too_many.status_code == 400

    unavailable = client.post('/api/cart/add', json={'product_id': sold_out_id})
    assert unavailable.status_code == 400


def test_api_add_rejects_bad_quantity(client, product_id):
    for quantity in ('two', [1], -1):
        response = client.post('/api/cart/add', json={'product_id': product_id, 'quantity': quantity})
        assert response.status_code == 400
        assert response.get_json()['success'] is False
    assert client.get('/api/cart/count').get_json()['cart_count'] == 0


def test_cart_message_lists_lines(ctx):
    cake = make_product()
    cart = Cart.from_session()
    cart.add(cake, 2, weight='1 kg', flavor='Vanilla', customization='Happy Birthday')
    totals = calculate_order_total(cart.total, load_site_settings())

    message = cart_message(cart.items(), totals)
    assert '1. Chocolate Truffle (1 kg, Vanilla) x2 - ₹2400.00' in message
    assert 'Customization: Happy Birthday' in message
    assert '*Delivery:* ₹0.00' in message
    assert message.endswith('*Total:* ₹2400.00')


def test_cart_page_links_to_whatsapp(client, app, product_id):
    client.post('/cart/add', data={'product_id': product_id, 'quantity': 1})
    page = client.get('/cart/').data
    assert b'https://wa.me/919876543210?text=' in page
    assert b'Chocolate%20Truffle' in page

    with app.app_context():
        save_site_settings({'enable_whatsapp_orders': False})
    assert b'https://wa.me/' not in client.get('/cart/').data


def test_whatsapp_is_offered_when_online_orders_are_off(client, app, product_id):
    with app.app_context():
        save_site_settings({'enable_online_orders': False})
    client.post('/cart/add', data={'product_id': product_id, 'quantity': 1})
    page = client.get('/cart/').data
    assert b'Online ordering is paused' in page
    assert b'Order via WhatsApp' in page
