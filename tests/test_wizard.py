from datetime import date, timedelta

from nestsweets.models import AdminNotification, CustomRequest
from nestsweets.utils.wizard import SESSION_KEY, CakeWizard
from conftest import login

CONTACT = {'name': 'Riya', 'phone': '9876543210', 'email': 'riya@example.com'}
CAKE = {'occasion': 'birthday', 'flavor': 'Chocolate', 'size': '1kg', 'tier': '1'}
DESIGN = {'design': 'Unicorn theme with pastel colours', 'message': 'Happy 5th Birthday'}


def delivery(days=5, **overrides):
    data = {'delivery_date': (date.today() + timedelta(days=days)).isoformat(),
            'budget': '1500-2000', 'urgency': 'normal'}
    data.update(overrides)
    return data


def wizard_state(client):
    with client.session_transaction() as sess:
        return sess.get(SESSION_KEY)


def test_wizard_store_and_navigation(ctx):
    wizard = CakeWizard.load()
    assert wizard.name == 'contact'
    wizard.store({'delivery_date': date(2030, 1, 2), 'name': 'Riya'})
    assert wizard.data['delivery_date'] == '2030-01-02'
    assert wizard.form_data()['delivery_date'] == date(2030, 1, 2)

    wizard.back()
    assert wizard.step == 1
    for _ in range(5):
        wizard.next()
    assert wizard.is_last
    assert CakeWizard.load().step == 4
    CakeWizard.reset()
    assert CakeWizard.load().step == 1


def test_full_wizard_submission(client, app):
    assert client.get('/custom-cake/').status_code == 200
    client.post('/custom-cake/', data=CONTACT)
    client.post('/custom-cake/', data=CAKE)
    client.post('/custom-cake/', data=DESIGN)
    assert wizard_state(client)['step'] == 4

    response = client.post('/custom-cake/', data=delivery())
    assert response.status_code == 302
    assert wizard_state(client) is None

    with app.app_context():
        custom_request = CustomRequest.query.one()
        assert custom_request.request_ref.startswith('CR')
        assert custom_request.name == 'Riya'
        assert custom_request.flavor == 'Chocolate'
        assert custom_request.status == 'pending'
        assert custom_request.user_id is None
        assert AdminNotification.query.filter_by(type='custom_cake_request').count() == 1
        ref = custom_request.request_ref

    assert response.headers['Location'].endswith(f'/custom-cake/submitted/{ref}')
    page = client.get(f'/custom-cake/submitted/{ref}')
    assert b'https://wa.me/' in page.data


def test_invalid_step_stays_put(client):
    response = client.post('/custom-cake/', data={'name': 'Riya', 'phone': '12'})
    assert response.status_code == 200
    assert b'valid 10-digit phone number' in response.data
    assert (wizard_state(client) or {}).get('step', 1) == 1


def test_missing_delivery_date_is_an_error(client, app):
    for step in (CONTACT, CAKE, DESIGN):
        client.post('/custom-cake/', data=step)
    response = client.post('/custom-cake/', data=delivery(delivery_date=''))
    assert response.status_code == 200
    assert b'Delivery date is required' in response.data
    with app.app_context():
        assert CustomRequest.query.count() == 0


def test_minimum_notice(client, app):
    for step in (CONTACT, CAKE, DESIGN):
        client.post('/custom-cake/', data=step)
    response = client.post('/custom-cake/', data=delivery(days=1))
    assert b'at least 2 days notice' in response.data


def test_back_keeps_answers(client):
    client.post('/custom-cake/', data=CONTACT)
    client.post('/custom-cake/', data={'action': 'back'})
    state = wizard_state(client)
    assert state['step'] == 1
    assert state['data']['name'] == 'Riya'


def test_logged_in_request_is_linked(client, app, users):
    login(client)
    for step in (CONTACT, CAKE, DESIGN, delivery()):
        client.post('/custom-cake/', data=step)
    with app.app_context():
        custom_request = CustomRequest.query.one()
        assert custom_request.user_id == users['customer']
        ref = custom_request.request_ref
    assert ref.encode() in client.get('/account/custom-requests').data


def test_submitted_page_is_private(client, app):
    for step in (CONTACT, CAKE, DESIGN, delivery()):
        client.post('/custom-cake/', data=step)
    with app.app_context():
        ref = CustomRequest.query.one().request_ref
    response = app.test_client().get(f'/custom-cake/submitted/{ref}')
    assert response.status_code == 302
