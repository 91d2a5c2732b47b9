"""Order and custom request management."""

import logging
from flask import render_template, redirect, url_for, flash, request
from flask_login import login_required
from sqlalchemy import or_
from nestsweets.extensions import db
from nestsweets.models import Order, OrderStatusHistory, CustomRequest
from nestsweets.models.order import ORDER_STATUSES
from nestsweets.models.custom_request import REQUEST_STATUSES
from nestsweets.forms.admin import OrderStatusForm, PaymentStatusForm, CustomRequestStatusForm
from nestsweets.utils.checkout import apply_status, cancel_order as cancel_placed_order
from nestsweets.utils.decorators import admin_required
from nestsweets.utils.exceptions import CheckoutError
from nestsweets.utils.notifications import notify_order_status_change, notify_custom_request_status
from . import admin_bp

logger = logging.getLogger(__name__)


def order_stats(orders):
    """Counts by status, revenue and pending payments over a list of orders."""
    counts = {status: 0 for status in ORDER_STATUSES}
    for order in orders:
        status = order.status or 'pending'
        counts[status] = counts.get(status, 0) + 1
    counts['all'] = len(orders)
    live = [o for o in orders if (o.status or 'pending') != 'cancelled']
    return {
        'counts': counts,
        'revenue': sum(o.total or 0 for o in live),
        'pending_payments': sum(1 for o in live if (o.payment_status or 'pending') == 'pending'),
    }


# --- Orders ---
@admin_bp.route('/orders')
@login_required
@admin_required
def orders():
    """All orders with status filter and search by ref, name or phone."""
    status = request.args.get('status', 'all')
    search = request.args.get('search', '').strip()

    stats = order_stats(Order.query.all())

    query = Order.query
    if status != 'all':
        query = query.filter(Order.status == status)
    if search:
        query = query.filter(
            or_(
                Order.order_ref.ilike(f'%{search}%'),
                Order.customer_name.ilike(f'%{search}%'),
                Order.customer_phone.ilike(f'%{search}%')
            )
        )

    return render_template('admin/orders.html',
                         orders=query.order_by(Order.created_at.desc()).all(),
                         stats=stats,
                         current_status=status,
                         search=search)


@admin_bp.route('/orders/<int:order_id>')
@login_required
@admin_required
def order_detail(order_id):
    order = Order.query.get_or_404(order_id)
    status_history = order.status_history.order_by(OrderStatusHistory.created_at.asc()).all()
    return render_template('admin/order_detail.html',
                         order=order,
                         status_history=status_history,
                         status_form=OrderStatusForm(status=order.status),
                         payment_form=PaymentStatusForm(payment_status=order.payment_status,
                                                        transaction_id=order.transaction_id))


@admin_bp.route('/orders/<int:order_id>/status', methods=['POST'])
@login_required
@admin_required
def update_order_status(order_id):
    """Move an order along and tell the customer."""
    order = Order.query.get_or_404(order_id)
    form = OrderStatusForm()
    if not form.validate_on_submit():
        flash('Invalid status.', 'danger')
        return redirect(url_for('admin.order_detail', order_id=order_id))

    new_status = form.status.data
    if new_status == 'cancelled':
        try:
            cancel_placed_order(order, form.notes.data or 'Cancelled by store', by_admin=True)
        except CheckoutError as e:
            flash(str(e), 'warning')
            return redirect(url_for('admin.order_detail', order_id=order_id))
    else:
        try:
            apply_status(order, new_status, form.notes.data or None)
        except CheckoutError as e:
            flash(str(e), 'warning')
            return redirect(url_for('admin.order_detail', order_id=order_id))
    db.session.commit()
    logger.info('Order %s moved to %s', order.order_ref, new_status)

    notify_order_status_change(order, new_status)
    flash(f'Order status updated to {new_status.replace("_", " ")}.', 'success')
    return redirect(url_for('admin.order_detail', order_id=order_id))


@admin_bp.route('/orders/<int:order_id>/payment', methods=['POST'])
@login_required
@admin_required
def update_payment_status(order_id):
    order = Order.query.get_or_404(order_id)
    form = PaymentStatusForm()
    if form.validate_on_submit():
        order.payment_status = form.payment_status.data
        if form.transaction_id.data:
            order.transaction_id = form.transaction_id.data
        db.session.commit()
        flash('Payment status updated.', 'success')
    else:
        flash('Invalid payment status.', 'danger')
    return redirect(url_for('admin.order_detail', order_id=order_id))


@admin_bp.route('/orders/<int:order_id>/cancel', methods=['POST'])
@login_required
@admin_required
def cancel_order(order_id):
    """Cancel with a reason; stock is restored."""
    order = Order.query.get_or_404(order_id)
    reason = request.form.get('reason', '').strip() or 'Cancelled by store'
    try:
        cancel_placed_order(order, reason, by_admin=True)
    except CheckoutError as e:
        flash(str(e), 'warning')
        return redirect(url_for('admin.order_detail', order_id=order_id))
    db.session.commit()

    notify_order_status_change(order, 'cancelled')
    flash('Order cancelled.', 'success')
    return redirect(url_for('admin.order_detail', order_id=order_id))


@admin_bp.route('/orders/<int:order_id>/delete', methods=['POST'])
@login_required
@admin_required
def delete_order(order_id):
    order = Order.query.get_or_404(order_id)
    db.session.delete(order)
    db.session.commit()
    logger.info('Order %s deleted', order.order_ref)
    flash('Order deleted.', 'success')
    return redirect(url_for('admin.orders'))


# --- Custom requests ---
@admin_bp.route('/custom-requests')
@login_required
@admin_required
def custom_requests():
    status = request.args.get('status', 'all')

    counts = {s: 0 for s in REQUEST_STATUSES}
    all_requests = CustomRequest.query.all()
    for item in all_requests:
        counts[item.status or 'pending'] = counts.get(item.status or 'pending', 0) + 1
    counts['all'] = len(all_requests)

    query = CustomRequest.query
    if status != 'all':
        query = query.filter_by(status=status)

    return render_template('admin/custom_requests.html',
                         requests=query.order_by(CustomRequest.created_at.desc()).all(),
                         counts=counts,
                         current_status=status)


@admin_bp.route('/custom-requests/<int:request_id>', methods=['GET', 'POST'])
@login_required
@admin_required
def custom_request_detail(request_id):
    """Request detail; posting updates status, notes and quote."""
    custom_request = CustomRequest.query.get_or_404(request_id)
    form = CustomRequestStatusForm(obj=custom_request)

    if form.validate_on_submit():
        old_status = custom_request.status
        custom_request.status = form.status.data
        custom_request.admin_notes = form.admin_notes.data
        custom_request.quoted_price = form.quoted_price.data
        db.session.commit()

        if custom_request.status != old_status:
            notify_custom_request_status(custom_request, custom_request.status)
        flash('Custom request updated.', 'success')
        return redirect(url_for('admin.custom_request_detail', request_id=request_id))

    return render_template('admin/custom_request_detail.html',
                         custom_request=custom_request,
                         form=form)


@admin_bp.route('/custom-requests/<int:request_id>/delete', methods=['POST'])
@login_required
@admin_required
def delete_custom_request(request_id):
    custom_request = CustomRequest.query.get_or_404(request_id)
    db.session.delete(custom_request)
    db.session.commit()
    flash('Custom request deleted.', 'success')
    return redirect(url_for('admin.custom_requests'))
