"""Order placement and cancellation."""

import logging
from datetime import datetime
from nestsweets.extensions import db
from nestsweets.models import Order, OrderItem
from .exceptions import CheckoutError, OutOfStock
from .pricing import calculate_order_total, is_pincode_allowed
from .stock import check_stock_availability, decrement_stock, increment_stock
from . import notifications

logger = logging.getLogger(__name__)


def validate_cart(lines, settings, pincode=None):
    """Raise CheckoutError when the cart cannot be ordered as is."""
    if not lines:
        raise CheckoutError('Your cart is empty.')
    if not settings.get('enable_online_orders', True):
        raise CheckoutError('Online orders are currently disabled. Please order on WhatsApp.')
    subtotal = sum(line.subtotal for line in lines)
    minimum = float(settings.get('minimum_order') or 0)
    if subtotal < minimum:
        raise CheckoutError(f'Minimum order amount is {minimum:.0f}. Please add more items.')
    if pincode is not None and not is_pincode_allowed(pincode, settings.get('allowed_pincodes')):
        raise CheckoutError(f'Sorry, we do not deliver to pincode {pincode} yet.')
    requested = {}
    for line in lines:
        requested[line.product.id] = requested.get(line.product.id, 0) + line.quantity
    for line in lines:
        if not line.product.in_stock:
            raise OutOfStock(line.product.name, line.quantity, 0)
        if not check_stock_availability(line.product, requested[line.product.id]):
            raise OutOfStock(line.product.name, requested[line.product.id], line.product.stock)
    return subtotal


def place_order(lines, details, settings, user=None):
    """Create the order, its items and first history entry, and take stock.

    details holds the checkout form fields. Notifications run after the
    commit and cannot undo the order.
    """
    subtotal = validate_cart(lines, settings, details.get('delivery_pincode'))
    totals = calculate_order_total(subtotal, settings)

    payment_method = details.get('payment_method') or 'cod'
    if payment_method == 'cod' and not settings.get('enable_cash_on_delivery', True):
        raise CheckoutError('Cash on delivery is not available.')
    if payment_method == 'online' and not settings.get('enable_online_payment', True):
        raise CheckoutError('Online payment is not available.')

    order = Order(
        order_ref=Order.generate_order_ref(),
        user_id=user.id if user else None,
        is_guest=user is None,
        customer_name=details['customer_name'],
        customer_phone=details['customer_phone'],
        customer_email=details.get('customer_email') or None,
        delivery_address=details.get('delivery_address'),
        delivery_pincode=details.get('delivery_pincode'),
        delivery_date=details.get('delivery_date'),
        delivery_time=details.get('delivery_time'),
        is_gift=bool(details.get('is_gift')),
        occasion_type=details.get('occasion_type') or None,
        gift_message=details.get('gift_message') or None,
        recipient_name=details.get('recipient_name') or None,
        recipient_phone=details.get('recipient_phone') or None,
        special_instructions=details.get('special_instructions') or None,
        subtotal=totals['subtotal'],
        delivery_fee=totals['delivery_fee'],
        tax=totals['tax'],
        total=totals['total'],
        payment_method=payment_method,
        payment_status='pending',
        status='pending'
    )
    db.session.add(order)

    for line in lines:
        order.items.append(OrderItem(
            product_id=line.product.id,
            cake_name=line.product.name,
            cake_image=line.product.thumbnail,
            weight=line.weight,
            flavor=line.flavor,
            quantity=line.quantity,
            base_price=line.price,
            total_price=line.subtotal,
            customization=line.customization or None
        ))
        ok, warning, remaining = decrement_stock(line.product, line.quantity)
        line.product.order_count = (line.product.order_count or 0) + line.quantity
        if warning:
            logger.info('Stock warning %s for %s (%s left)', warning, line.product.name, remaining)

    order.add_status_history('pending', 'Order placed')
    db.session.commit()
    logger.info('Order %s placed (%d items, total %.2f)', order.order_ref, len(lines), order.total)

    notifications.notify_admins_new_order(order)
    notifications.notify_order_confirmation(order)
    return order


def apply_status(order, new_status, notes=None):
    """Move an order to new_status, stamping confirmation/delivery times.

    A cancelled order is final: its stock has already been put back.
    """
    if order.status == 'cancelled':
        raise CheckoutError('This order is cancelled and cannot be reopened.')
    order.status = new_status
    now = datetime.utcnow()
    if new_status == 'confirmed' and not order.confirmed_at:
        order.confirmed_at = now
    elif new_status == 'delivered':
        order.delivered_at = now
        if order.payment_method == 'cod':
            order.payment_status = 'paid'
    order.add_status_history(new_status, notes)


def cancel_order(order, reason=None, by_admin=False):
    """Cancel an order and put its stock back. The caller commits."""
    if not by_admin and not order.can_cancel():
        raise CheckoutError('This order can no longer be cancelled.')
    if order.status == 'cancelled':
        raise CheckoutError('This order is already cancelled.')
    for item in order.items:
        if item.product is not None:
            increment_stock(item.product, item.quantity)
    order.cancel_reason = reason or None
    apply_status(order, 'cancelled', reason or 'Order cancelled')
