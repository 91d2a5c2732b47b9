from datetime import date, timedelta

import pytest

from nestsweets import create_app
from nestsweets.extensions import db
from nestsweets.models import User, Product

PASSWORD = 'secret123'


@pytest.fixture
def app():
    app = create_app('testing')
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def ctx(app):
    """Request context for helpers that use the session or url_for."""
    with app.test_request_context():
        yield


def make_user(email='cust@example.com', role='customer', name='Test Customer',
              phone='9876543210', is_active=True):
    user = User(email=email, name=name, phone=phone, role=role, is_active=is_active)
    user.set_password(PASSWORD)
    db.session.add(user)
    db.session.commit()
    return user


def make_product(name='Chocolate Truffle', base_price=600, stock=None, in_stock=True, **kwargs):
    kwargs.setdefault('weights', [{'weight': '0.5 kg', 'price': base_price, 'servings': '4-6'},
                                  {'weight': '1 kg', 'price': base_price * 2, 'servings': '8-10'}])
    kwargs.setdefault('category', 'Chocolate')
    product = Product(name=name, base_price=base_price, stock=stock, in_stock=in_stock, **kwargs)
    product.generate_slug()
    db.session.add(product)
    db.session.commit()
    return product


@pytest.fixture
def users(app):
    """Ids keyed by role: a customer, an admin and a super admin."""
    with app.app_context():
        return {
            'customer': make_user().id,
            'admin': make_user('admin@example.com', role='admin', name='Admin').id,
            'superadmin': make_user('boss@example.com', role='superadmin', name='Boss').id,
        }


@pytest.fixture
def product_id(app):
    with app.app_context():
        return make_product(stock=20).id


def login(client, email='cust@example.com', password=PASSWORD):
    return client.post('/login', data={'email': email, 'password': password})


def checkout_data(**overrides):
    data = {
        'customer_name': 'Asha Verma',
        'customer_phone': '98765 43210',
        'customer_email': 'asha@example.com',
        'delivery_address': '12 Main Road, Narnaund',
        'delivery_pincode': '126152',
        'delivery_date': (date.today() + timedelta(days=1)).isoformat(),
        'delivery_time': 'evening',
        'payment_method': 'cod',
    }
    data.update(overrides)
    return data
