from nestsweets.extensions import db
from nestsweets.models import Feedback, Order, Product, Review
from nestsweets.routes.auth import GUEST_ORDERS_KEY
from conftest import checkout_data, login, make_product, make_user


def place(client, product_id, quantity=1, **overrides):
    client.post('/cart/add', data={'product_id': product_id, 'quantity': quantity, 'weight': '0.5 kg'})
    return client.post('/orders/checkout', data=checkout_data(**overrides))


def latest_order(app):
    with app.app_context():
        order = Order.query.order_by(Order.id.desc()).first()
        return order.id, order.order_ref


def test_checkout_requires_non_empty_cart(client):
    response = client.get('/orders/checkout')
    assert response.status_code == 302
    assert '/cart' in response.headers['Location']


def test_guest_checkout(client, app, product_id):
    response = place(client, product_id)
    assert response.status_code == 302

    _, ref = latest_order(app)
    assert response.headers['Location'].endswith(f'/orders/confirmation/{ref}')
    with client.session_transaction() as sess:
        assert sess[GUEST_ORDERS_KEY] == [ref]
        assert not sess.get('cart')

    page = client.get(f'/orders/confirmation/{ref}')
    assert page.status_code == 200
    assert b'https://wa.me/919876543210?text=' in page.data


def test_confirmation_hidden_from_other_visitors(client, app, product_id):
    place(client, product_id)
    _, ref = latest_order(app)
    assert app.test_client().get(f'/orders/confirmation/{ref}').status_code == 404


def test_invalid_checkout_form_is_redisplayed(client, app, product_id):
    response = place(client, product_id, customer_phone='123', delivery_date='2001-01-01')
    assert response.status_code == 200
    assert b'valid 10-digit phone number' in response.data
    assert b'cannot be in the past' in response.data
    with app.app_context():
        assert Order.query.count() == 0


def test_checkout_out_of_stock(client, app):
    with app.app_context():
        cake_id = make_product(stock=2).id
    client.post('/cart/add', data={'product_id': cake_id, 'quantity': 2})
    with app.app_context():
        db.session.get(Product, cake_id).stock = 1
        db.session.commit()

    response = client.post('/orders/checkout', data=checkout_data())
    assert response.status_code == 302
    with app.app_context():
        assert Order.query.count() == 0


def test_logged_in_checkout_and_history(client, app, users, product_id):
    login(client)
    place(client, product_id)
    order_id, ref = latest_order(app)
    with app.app_context():
        assert db.session.get(Order, order_id).user_id == users['customer']

    history = client.get('/orders/')
    assert ref.encode() in history.data

    assert ref.encode() not in client.get('/orders/?status=delivered').data
    assert ref.encode() in client.get('/orders/?status=pending').data
    assert ref.encode() in client.get('/orders/?search=Chocolate').data

    detail = client.get(f'/orders/{ref}')
    assert detail.status_code == 200


def test_guest_orders_are_claimed_on_login(client, app, users, product_id):
    place(client, product_id)
    order_id, _ = latest_order(app)
    login(client)
    with app.app_context():
        order = db.session.get(Order, order_id)
        assert order.user_id == users['customer']
        assert not order.is_guest


def test_customer_cancel_restores_stock(client, app, users, product_id):
    login(client)
    place(client, product_id, quantity=3)
    order_id, ref = latest_order(app)
    with app.app_context():
        assert db.session.get(Product, product_id).stock == 17

    client.post(f'/orders/{ref}/cancel', data={'reason': 'Wrong date'})
    with app.app_context():
        order = db.session.get(Order, order_id)
        assert order.status == 'cancelled'
        assert order.cancel_reason == 'Wrong date'
        assert db.session.get(Product, product_id).stock == 20


def test_cannot_touch_someone_elses_order(client, app, users, product_id):
    login(client)
    place(client, product_id)
    _, ref = latest_order(app)
    client.get('/logout')

    with app.app_context():
        make_user('other@example.com')
    login(client, 'other@example.com')
    assert client.post(f'/orders/{ref}/cancel').status_code == 404
    assert client.get(f'/orders/{ref}').status_code == 302


def test_reorder_fills_cart(client, app, users, product_id):
    login(client)
    place(client, product_id, quantity=2)
    _, ref = latest_order(app)

    client.post(f'/orders/{ref}/reorder')
    assert client.get('/api/cart/count').get_json()['cart_count'] == 2


def test_feedback_once_per_order(client, app, users, product_id):
    login(client)
    place(client, product_id)
    order_id, ref = latest_order(app)

    client.post(f'/orders/{ref}/feedback', data={'rating': 4, 'comment': 'Lovely', 'would_recommend': 'y'})
    client.post(f'/orders/{ref}/feedback', data={'rating': 1, 'comment': 'Again'})

    with app.app_context():
        feedback = Feedback.query.filter_by(order_id=order_id).one()
        assert feedback.rating == 4
        review = Review.query.one()
        assert review.product_id == product_id
        assert review.approved is False
