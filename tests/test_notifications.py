from unittest import mock

from botocore.exceptions import ClientError

from nestsweets.extensions import db, mail
from nestsweets.models import Notification, User
from nestsweets.utils.mailer import send_admin_email, send_email
from nestsweets.utils.notifications import (send_broadcast_notification, send_notification,
                                            raise_admin_alert)
from nestsweets.utils.sns import send_sns_alert
from conftest import login, make_user


def test_broadcast_skips_inactive_users(ctx):
    make_user('a@example.com')
    make_user('b@example.com')
    make_user('c@example.com', is_active=False)
    assert send_broadcast_notification('Sale', '20% off today') == 2
    assert Notification.query.filter_by(type='promo').count() == 2


def test_notification_pages(client, app, users):
    with app.app_context():
        first = send_notification(users['customer'], 'One', 'First', type='order').id
        send_notification(users['customer'], 'Two', 'Second')
        send_notification(users['admin'], 'Other', 'Not yours')

    login(client)
    page = client.get('/account/notifications')
    assert b'One' in page.data and b'Two' in page.data
    assert b'Not yours' not in page.data

    client.post(f'/account/notifications/{first}/read')
    assert b'First' in client.get('/account/notifications?filter=read').data
    assert b'First' not in client.get('/account/notifications?filter=unread').data

    client.post('/account/notifications/clear-read')
    with app.app_context():
        assert Notification.query.filter_by(user_id=users['customer']).count() == 1

    client.post('/account/notifications/read-all')
    with app.app_context():
        assert Notification.query.filter_by(user_id=users['customer'], is_read=False).count() == 0


def test_cannot_touch_other_users_notifications(client, app, users):
    with app.app_context():
        other = send_notification(users['admin'], 'Admin only', 'Secret').id
    login(client)
    assert client.post(f'/account/notifications/{other}/delete').status_code == 404
    assert client.post(f'/api/notifications/{other}/read').status_code == 404


def test_api_notifications(client, app, users):
    with app.app_context():
        note = send_notification(users['customer'], 'Hello', 'World', link='/cakes').id
    login(client)

    data = client.get('/api/notifications').get_json()
    assert data['unread_count'] == 1
    assert data['notifications'][0]['title'] == 'Hello'
    assert data['notifications'][0]['link'] == '/cakes'

    assert client.post(f'/api/notifications/{note}/read').get_json() == {'success': True}
    assert client.get('/api/notifications').get_json()['unread_count'] == 0


def test_emails_are_recorded(ctx):
    with mail.record_messages() as outbox:
        assert send_admin_email('New order', 'Body')
        assert send_email('Hi', [None, 'asha@example.com'], 'Thanks')
        assert send_email('Nobody', [], 'Skipped') is False
    assert [m.subject for m in outbox] == ['New order', 'Hi']
    assert outbox[0].recipients == ['orders@nestsweets.test']


def test_email_skipped_without_mail_server(app, ctx):
    app.config.update(MAIL_SUPPRESS_SEND=False, MAIL_USERNAME=None)
    assert send_email('Hi', ['asha@example.com'], 'Thanks') is False


def test_sns_skipped_without_topic(ctx):
    with mock.patch('nestsweets.utils.sns.boto3') as boto3:
        assert send_sns_alert('Subject', 'Message') is False
    boto3.client.assert_not_called()


def test_sns_publish(app, ctx):
    app.config['SNS_TOPIC_ARN'] = 'arn:aws:sns:us-east-1:123456789012:orders'
    with mock.patch('nestsweets.utils.sns.boto3') as boto3:
        assert send_sns_alert('x' * 150, 'Message')
    boto3.client.return_value.publish.assert_called_once_with(
        TopicArn='arn:aws:sns:us-east-1:123456789012:orders',
        Subject='x' * 100,
        Message='Message'
    )


def test_sns_failure_is_logged_not_raised(app, ctx):
    app.config['SNS_TOPIC_ARN'] = 'arn:aws:sns:us-east-1:123456789012:orders'
    error = ClientError({'Error': {'Code': 'AuthorizationError', 'Message': 'denied'}}, 'Publish')
    with mock.patch('nestsweets.utils.sns.boto3') as boto3:
        boto3.client.return_value.publish.side_effect = error
        assert send_sns_alert('Subject', 'Message') is False


def test_admin_alert_survives_sns_failure(app, ctx):
    app.config['SNS_TOPIC_ARN'] = 'arn:aws:sns:us-east-1:123456789012:orders'
    error = ClientError({'Error': {'Code': 'Throttling', 'Message': 'slow down'}}, 'Publish')
    with mock.patch('nestsweets.utils.sns.boto3') as boto3:
        boto3.client.return_value.publish.side_effect = error
        alert = raise_admin_alert('contact_message', customer_name='Asha', summary='Question')
    assert alert.status == 'unread'


def test_contact_form_raises_alert(client, app, users):
    response = client.post('/contact', data={
        'name': 'Asha', 'email': 'asha@example.com', 'phone': '9876543210',
        'subject': 'Bulk order', 'message': 'Do you take office orders?'
    })
    assert response.status_code == 302

    login(client, 'admin@example.com')
    assert b'Bulk order' in client.get('/admin/messages').data
    assert b'Contact Message' in client.get('/admin/alerts').data


def test_deleting_user_removes_their_notifications(app, ctx):
    user = make_user()
    send_notification(user.id, 'Bye', 'Soon gone')
    db.session.delete(db.session.get(User, user.id))
    db.session.commit()
    assert Notification.query.count() == 0
