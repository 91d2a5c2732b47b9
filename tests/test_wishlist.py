from nestsweets.extensions import db
from nestsweets.models import Product, Wishlist
from conftest import login, make_product, make_user


def test_toggle(ctx):
    user = make_user()
    wishlist = Wishlist.for_user(user.id)
    assert wishlist.toggle(7) is True
    assert wishlist.toggle(7) is False
    assert wishlist.add(3) and not wishlist.add(3)
    db.session.commit()
    assert Wishlist.query.filter_by(user_id=user.id).one().items == [3]


def test_wishlist_pages(client, app, users, product_id):
    login(client)
    client.post(f'/account/wishlist/{product_id}/add')
    assert b'Chocolate Truffle' in client.get('/account/wishlist').data

    client.post(f'/account/wishlist/{product_id}/move-to-cart')
    assert client.get('/api/cart/count').get_json()['cart_count'] == 1
    with app.app_context():
        assert Wishlist.query.one().items == []


def test_deleted_cakes_are_skipped(client, app, users):
    with app.app_context():
        keep = make_product('Keep Me').id
        gone = make_product('Gone Cake').id
    login(client)
    client.post(f'/account/wishlist/{keep}/add')
    client.post(f'/account/wishlist/{gone}/add')
    with app.app_context():
        db.session.delete(db.session.get(Product, gone))
        db.session.commit()

    page = client.get('/account/wishlist')
    assert b'Keep Me' in page.data
    assert b'Gone Cake' not in page.data


def test_api_toggle(client, app, users, product_id):
    login(client)
    assert client.post('/api/wishlist/toggle', json={'product_id': product_id}).get_json() == \
        {'success': True, 'in_wishlist': True}
    assert client.post('/api/wishlist/toggle', json={'product_id': product_id}).get_json()['in_wishlist'] is False
    assert client.post('/api/wishlist/toggle', json={'product_id': 999}).status_code == 404


def test_wishlist_requires_login(client):
    assert client.get('/account/wishlist').status_code == 302
