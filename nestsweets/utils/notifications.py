"""In-site notifications and admin alerts.

send_notification and send_broadcast_notification propagate database
errors. The notify_* helpers are side effects of a write that has already
been committed: they log failures and never raise.
"""

import logging
from flask import current_app, url_for
from sqlalchemy.exc import SQLAlchemyError
from nestsweets.extensions import db
from nestsweets.models import User, Notification, AdminNotification
from .mailer import send_admin_email, send_email
from .sns import send_sns_alert

logger = logging.getLogger(__name__)

ORDER_STATUS_MESSAGES = {
    'confirmed': ('✅ Order Confirmed', 'Your order #{ref} has been confirmed.'),
    'preparing': ('🔄 Order Being Prepared', "Great news! We're now preparing your {cakes}."),
    'out_for_delivery': ('🚚 Out for Delivery', 'Your order #{ref} is on its way!'),
    'delivered': ('✅ Order Completed', 'Your order for {cakes} has been completed!'),
    'cancelled': ('❌ Order Cancelled', 'Your order for {cakes} has been cancelled.'),
}

REQUEST_STATUS_MESSAGES = {
    'approved': ('✅ Custom Request Approved', 'Your custom {occasion} cake request has been approved!'),
    'rejected': ('❌ Custom Request Update',
                 'Unfortunately, we cannot fulfill your {occasion} cake request at this time.'),
}


def send_notification(user_id, title, message, type='system', link=None, extra=None, commit=True):
    """Create one notification for a user."""
    notification = Notification(
        user_id=user_id,
        title=title,
        message=message,
        type=type,
        link=link,
        extra=extra
    )
    db.session.add(notification)
    if commit:
        db.session.commit()
    return notification


def send_broadcast_notification(title, message, type='promo', link=None):
    """Create one notification per active user. Returns how many were sent."""
    user_ids = [uid for (uid,) in db.session.query(User.id).filter(User.is_active.is_(True))]
    for user_id in user_ids:
        db.session.add(Notification(
            user_id=user_id,
            title=title,
            message=message,
            type=type,
            link=link
        ))
    db.session.commit()
    logger.info('Broadcast "%s" sent to %d users', title, len(user_ids))
    return len(user_ids)


def _safely(action, description):
    try:
        return action()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception('Failed to %s', description)
        return None


def notify_new_product(product):
    return _safely(
        lambda: send_broadcast_notification(
            '🎂 New Cake Added!',
            f'Check out our new {product.name}!',
            type='product',
            link=url_for('main.cake_detail', slug=product.slug)
        ),
        f'broadcast new product {product.id}'
    )


def notify_order_confirmation(order):
    if not order.user_id:
        return None
    return _safely(
        lambda: send_notification(
            order.user_id,
            '🎉 Order Placed',
            f'Your order #{order.order_ref} has been placed successfully!',
            type='order',
            link=url_for('orders.order_detail', order_ref=order.order_ref),
            extra={'order_id': order.id, 'status': order.status}
        ),
        f'notify order confirmation {order.order_ref}'
    )


def notify_order_status_change(order, new_status):
    if not order.user_id:
        return None
    title, template = ORDER_STATUS_MESSAGES.get(
        new_status, ('📦 Order Status Updated', 'Your order for {cakes} status: {status}')
    )
    message = template.format(ref=order.order_ref, cakes=order.item_names or 'cake',
                              status=new_status.replace('_', ' '))
    return _safely(
        lambda: send_notification(
            order.user_id,
            title,
            message,
            type='order',
            link=url_for('orders.order_detail', order_ref=order.order_ref),
            extra={'order_id': order.id, 'status': new_status}
        ),
        f'notify status change of {order.order_ref}'
    )


def notify_custom_request_status(custom_request, status):
    if not custom_request.user_id:
        return None
    title, template = REQUEST_STATUS_MESSAGES.get(
        status, ('📝 Custom Request Update', 'Your {occasion} cake request status: {status}')
    )
    message = template.format(occasion=custom_request.occasion, status=status)
    return _safely(
        lambda: send_notification(
            custom_request.user_id,
            title,
            message,
            type='custom_request',
            link=url_for('account.my_requests'),
            extra={'request_id': custom_request.id, 'status': status}
        ),
        f'notify custom request {custom_request.request_ref}'
    )


def raise_admin_alert(type, ref=None, target_id=None, customer_name=None,
                      customer_phone=None, summary=None):
    """Record a back-office alert and mirror it to SNS when configured."""
    def create():
        alert = AdminNotification(
            type=type,
            ref=ref,
            target_id=target_id,
            customer_name=customer_name,
            customer_phone=customer_phone,
            summary=summary
        )
        db.session.add(alert)
        db.session.commit()
        return alert

    alert = _safely(create, f'record admin alert {type} {ref}')
    send_sns_alert(f'NestSweets: {type.replace("_", " ")} {ref or ""}'.strip(), summary or '')
    return alert


def notify_admins_new_order(order):
    raise_admin_alert(
        'new_order',
        ref=order.order_ref,
        target_id=order.id,
        customer_name=order.customer_name,
        customer_phone=order.customer_phone,
        summary=f'{order.item_names} - total {order.total:.2f}'
    )
    body = (
        f'New order {order.order_ref}\n'
        f'Customer: {order.customer_name} ({order.customer_phone})\n'
        f'Items: {order.item_names}\n'
        f'Delivery: {order.delivery_date} {order.delivery_slot_label}\n'
        f'Total: {order.total:.2f} ({(order.payment_method or "cod").upper()})\n'
        f'Manage: {current_app.config["SITE_URL"].rstrip("/")}'
        f'{url_for("admin.order_detail", order_id=order.id)}\n'
    )
    send_admin_email(f'New order {order.order_ref}', body)
    if order.customer_email:
        send_email(
            f'Your NestSweets order {order.order_ref}',
            [order.customer_email],
            f'Hi {order.customer_name},\n\nThank you for your order {order.order_ref}. '
            f'We will confirm it shortly.\n\nTotal: {order.total:.2f}\n'
        )


def notify_admins_custom_request(custom_request):
    raise_admin_alert(
        'custom_cake_request',
        ref=custom_request.request_ref,
        target_id=custom_request.id,
        customer_name=custom_request.name,
        customer_phone=custom_request.phone,
        summary=f'{custom_request.occasion} / {custom_request.flavor} / {custom_request.size}, '
                f'budget {custom_request.budget}'
    )
    body = (
        f'Custom cake request {custom_request.request_ref}\n'
        f'From: {custom_request.name} ({custom_request.phone})\n'
        f'Occasion: {custom_request.occasion}\nFlavor: {custom_request.flavor}\n'
        f'Size: {custom_request.size}\nBudget: {custom_request.budget}\n'
        f'Delivery: {custom_request.delivery_date}\nUrgency: {custom_request.urgency}\n\n'
        f'{custom_request.design}\n'
    )
    send_admin_email(f'Custom cake request {custom_request.request_ref}', body)
