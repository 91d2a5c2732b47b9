"""Checkout and order routes."""

import logging
from flask import Blueprint, render_template, redirect, url_for, flash, request, session, abort, current_app
from flask_login import login_required, current_user
from sqlalchemy import or_
from nestsweets.extensions import db
from nestsweets.models import Order, OrderItem, OrderStatusHistory, Feedback, Review, Product
from nestsweets.models.order import ORDER_STATUSES
from nestsweets.models.settings import load_site_settings
from nestsweets.forms.orders import CheckoutForm, FeedbackForm, CancelOrderForm
from nestsweets.utils.cart import Cart
from nestsweets.utils.checkout import place_order, cancel_order as cancel_placed_order, validate_cart
from nestsweets.utils.exceptions import CheckoutError
from nestsweets.utils.pricing import calculate_order_total
from nestsweets.utils.whatsapp import whatsapp_url, order_message
from .auth import GUEST_ORDERS_KEY

orders_bp = Blueprint('orders', __name__)

logger = logging.getLogger(__name__)


def _can_view(order):
    if current_user.is_authenticated and (order.user_id == current_user.id or current_user.is_admin()):
        return True
    return order.order_ref in session.get(GUEST_ORDERS_KEY, [])


def _get_own_order(order_ref):
    order = Order.query.filter_by(order_ref=order_ref).first_or_404()
    if order.user_id != current_user.id:
        abort(404)
    return order


@orders_bp.route('/checkout', methods=['GET', 'POST'])
def checkout():
    """Checkout page."""
    cart = Cart.from_session()
    lines = cart.items()
    settings = load_site_settings()

    try:
        validate_cart(lines, settings)
    except CheckoutError as e:
        flash(str(e), 'warning')
        return redirect(url_for('cart.view_cart'))

    form = CheckoutForm()
    form.limit_payment_methods(settings)
    if request.method == 'GET' and current_user.is_authenticated:
        form.customer_name.data = current_user.name
        form.customer_email.data = current_user.email
        form.customer_phone.data = current_user.phone

    if form.validate_on_submit():
        details = {name: field.data for name, field in form._fields.items() if name != 'csrf_token'}
        try:
            order = place_order(lines, details, settings,
                                user=current_user if current_user.is_authenticated else None)
        except CheckoutError as e:
            db.session.rollback()
            flash(str(e), 'danger')
        else:
            cart.clear()
            if order.is_guest:
                session[GUEST_ORDERS_KEY] = session.get(GUEST_ORDERS_KEY, []) + [order.order_ref]
            flash('Order placed successfully!', 'success')
            return redirect(url_for('orders.order_confirmation', order_ref=order.order_ref))

    subtotal = sum(line.subtotal for line in lines)
    return render_template('orders/checkout.html',
                         form=form,
                         lines=lines,
                         totals=calculate_order_total(subtotal, settings))


@orders_bp.route('/confirmation/<order_ref>')
def order_confirmation(order_ref):
    """Order confirmation page with a WhatsApp link to the store."""
    order = Order.query.filter_by(order_ref=order_ref).first_or_404()
    if not _can_view(order):
        abort(404)

    settings = load_site_settings()
    store_whatsapp = settings.get('whatsapp') or current_app.config.get('ADMIN_WHATSAPP')
    wa_url = None
    if settings.get('enable_whatsapp_orders', True) and store_whatsapp:
        wa_url = whatsapp_url(store_whatsapp, order_message(order, settings.get('currency', 'INR')))

    return render_template('orders/confirmation.html', order=order, whatsapp_url=wa_url)


@orders_bp.route('/')
@login_required
def order_history():
    """The user's orders with status filter, search and counts."""
    status = request.args.get('status', 'all')
    search = request.args.get('search', '').strip()

    base = Order.query.filter_by(user_id=current_user.id)
    all_orders = base.all()

    counts = {s: 0 for s in ORDER_STATUSES}
    for order in all_orders:
        counts[order.status or 'pending'] = counts.get(order.status or 'pending', 0) + 1
    counts['all'] = len(all_orders)
    total_spent = sum(o.total or 0 for o in all_orders if o.status != 'cancelled')

    query = base
    if status != 'all':
        query = query.filter(Order.status == status)
    if search:
        query = query.filter(
            or_(
                Order.order_ref.ilike(f'%{search}%'),
                Order.items.any(OrderItem.cake_name.ilike(f'%{search}%'))
            )
        )
    orders = query.order_by(Order.created_at.desc()).all()

    return render_template('orders/history.html',
                         orders=orders,
                         counts=counts,
                         total_spent=total_spent,
                         current_status=status,
                         search=search)


@orders_bp.route('/<order_ref>')
@login_required
def order_detail(order_ref):
    """Order detail page."""
    order = Order.query.filter_by(order_ref=order_ref).first_or_404()
    if not _can_view(order):
        flash('Access denied.', 'danger')
        return redirect(url_for('main.index'))

    status_history = order.status_history.order_by(
        OrderStatusHistory.created_at.asc()
    ).all()

    return render_template('orders/detail.html',
                         order=order,
                         status_history=status_history,
                         cancel_form=CancelOrderForm())


@orders_bp.route('/<order_ref>/cancel', methods=['POST'])
@login_required
def cancel_order(order_ref):
    """Cancel a pending or confirmed order."""
    order = _get_own_order(order_ref)
    form = CancelOrderForm()
    try:
        cancel_placed_order(order, form.reason.data or 'Cancelled by customer')
    except CheckoutError as e:
        flash(str(e), 'warning')
        return redirect(url_for('orders.order_detail', order_ref=order_ref))

    db.session.commit()
    logger.info('Order %s cancelled by customer', order.order_ref)
    flash('Your order has been cancelled.', 'success')
    return redirect(url_for('orders.order_detail', order_ref=order_ref))


@orders_bp.route('/<order_ref>/reorder', methods=['POST'])
@login_required
def reorder(order_ref):
    """Put the items of a past order back in the cart."""
    order = _get_own_order(order_ref)
    cart = Cart.from_session()
    added = 0
    for item in order.items:
        product = db.session.get(Product, item.product_id) if item.product_id else None
        if product is None or not product.in_stock:
            continue
        cart.add(product, item.quantity, weight=item.weight, flavor=item.flavor,
                 customization=item.customization)
        added += 1

    if added:
        flash(f'{added} item(s) added to your cart.', 'success')
    else:
        flash('None of these cakes are available any more.', 'warning')
    return redirect(url_for('cart.view_cart'))


@orders_bp.route('/<order_ref>/feedback', methods=['GET', 'POST'])
@login_required
def feedback(order_ref):
    """Rate an order; each item also gets an unapproved product review."""
    order = _get_own_order(order_ref)
    if order.feedback is not None:
        flash('You have already left feedback for this order.', 'info')
        return redirect(url_for('orders.order_detail', order_ref=order_ref))

    form = FeedbackForm()
    if form.validate_on_submit():
        order.feedback = Feedback(
            rating=form.rating.data,
            comment=form.comment.data,
            would_recommend=form.would_recommend.data
        )
        reviewed = set()
        for item in order.items:
            if not item.product_id or item.product_id in reviewed:
                continue
            reviewed.add(item.product_id)
            db.session.add(Review(
                product_id=item.product_id,
                user_id=current_user.id,
                order_id=order.id,
                customer_name=current_user.name,
                rating=form.rating.data,
                comment=form.comment.data,
                approved=False
            ))
        db.session.commit()
        flash('Thank you for your feedback!', 'success')
        return redirect(url_for('orders.order_detail', order_ref=order_ref))

    return render_template('orders/feedback.html', order=order, form=form)
