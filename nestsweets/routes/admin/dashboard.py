"""Dashboard, analytics, admin alerts and contact messages."""

from flask import render_template, redirect, url_for, flash, request, current_app
from flask_login import login_required
from nestsweets.extensions import db
from nestsweets.models import Order, Product, CustomRequest, AdminNotification, ContactMessage
from nestsweets.utils.analytics import summarize_orders
from nestsweets.utils.decorators import admin_required
from . import admin_bp


@admin_bp.route('/')
@admin_bp.route('/dashboard')
@login_required
@admin_required
def dashboard():
    """Admin dashboard with store overview."""
    total_orders = Order.query.count()
    total_products = Product.query.count()
    pending_orders = Order.query.filter_by(status='pending').count()
    delivered_orders = Order.query.filter_by(status='delivered').count()
    pending_requests = CustomRequest.query.filter_by(status='pending').count()
    unread_alerts = AdminNotification.query.filter_by(status='unread').count()
    new_messages = ContactMessage.query.filter_by(status='new').count()

    recent_orders = Order.query.order_by(
        Order.created_at.desc()
    ).limit(10).all()

    return render_template('admin/dashboard.html',
                         total_orders=total_orders,
                         total_products=total_products,
                         pending_orders=pending_orders,
                         delivered_orders=delivered_orders,
                         pending_requests=pending_requests,
                         unread_alerts=unread_alerts,
                         new_messages=new_messages,
                         recent_orders=recent_orders)


@admin_bp.route('/analytics')
@login_required
@admin_required
def analytics():
    """Aggregates over the most recent orders."""
    limit = current_app.config.get('ANALYTICS_ORDER_LIMIT', 500)
    orders = Order.query.order_by(Order.created_at.desc()).limit(limit).all()
    summary = summarize_orders(orders)
    return render_template('admin/analytics.html', summary=summary, order_limit=limit)


# --- Admin alerts ---
@admin_bp.route('/alerts')
@login_required
@admin_required
def alerts():
    status = request.args.get('status', '')
    query = AdminNotification.query
    if status:
        query = query.filter_by(status=status)
    items = query.order_by(AdminNotification.created_at.desc()).limit(200).all()
    return render_template('admin/alerts.html', alerts=items, current_status=status)


@admin_bp.route('/alerts/<int:alert_id>/read', methods=['POST'])
@login_required
@admin_required
def mark_alert_read(alert_id):
    alert = AdminNotification.query.get_or_404(alert_id)
    alert.status = 'read'
    db.session.commit()
    return redirect(request.referrer or url_for('admin.alerts'))


@admin_bp.route('/alerts/read-all', methods=['POST'])
@login_required
@admin_required
def mark_all_alerts_read():
    AdminNotification.query.filter_by(status='unread').update({'status': 'read'})
    db.session.commit()
    flash('All alerts marked as read.', 'success')
    return redirect(url_for('admin.alerts'))


# --- Contact Messages ---
@admin_bp.route('/messages')
@login_required
@admin_required
def messages():
    """Contact messages."""
    page = request.args.get('page', 1, type=int)
    status = request.args.get('status', '')

    query = ContactMessage.query

    if status:
        query = query.filter_by(status=status)

    pagination = query.order_by(
        ContactMessage.created_at.desc()
    ).paginate(page=page, per_page=20, error_out=False)

    return render_template('admin/messages.html',
                         messages=pagination.items,
                         pagination=pagination,
                         current_status=status)


@admin_bp.route('/messages/<int:message_id>/mark-read', methods=['POST'])
@login_required
@admin_required
def mark_message_read(message_id):
    """Mark message as read."""
    message = ContactMessage.query.get_or_404(message_id)
    message.status = 'read'
    db.session.commit()

    flash('Message marked as read.', 'success')
    return redirect(url_for('admin.messages'))
