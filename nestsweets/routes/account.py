"""Customer account pages: notifications, wishlist and custom requests."""

from flask import Blueprint, render_template, redirect, url_for, flash, request, jsonify
from flask_login import login_required, current_user
from nestsweets.extensions import db
from nestsweets.models import Notification, Wishlist, Product, CustomRequest
from nestsweets.utils.cart import Cart

account_bp = Blueprint('account', __name__)

NOTIFICATION_FILTERS = ('all', 'unread', 'read')


def _own_notification(notification_id):
    return Notification.query.filter_by(
        id=notification_id,
        user_id=current_user.id
    ).first_or_404()


# --- Notifications ---
@account_bp.route('/notifications')
@login_required
def notifications():
    """Notification list with all/unread/read filter."""
    current_filter = request.args.get('filter', 'all')
    if current_filter not in NOTIFICATION_FILTERS:
        current_filter = 'all'

    base = Notification.query.filter_by(user_id=current_user.id)
    counts = {
        'all': base.count(),
        'unread': base.filter_by(is_read=False).count(),
        'read': base.filter_by(is_read=True).count(),
    }

    query = base
    if current_filter == 'unread':
        query = query.filter_by(is_read=False)
    elif current_filter == 'read':
        query = query.filter_by(is_read=True)

    items = query.order_by(Notification.created_at.desc()).all()
    return render_template('account/notifications.html',
                         notifications=items,
                         counts=counts,
                         current_filter=current_filter)


@account_bp.route('/notifications/<int:notification_id>/read', methods=['POST'])
@login_required
def mark_notification_read(notification_id):
    notification = _own_notification(notification_id)
    notification.is_read = True
    db.session.commit()
    if request.headers.get('X-Requested-With') == 'XMLHttpRequest':
        return jsonify({'success': True})
    if notification.link and request.form.get('follow'):
        return redirect(notification.link)
    return redirect(request.referrer or url_for('account.notifications'))


@account_bp.route('/notifications/read-all', methods=['POST'])
@login_required
def mark_all_read():
    updated = Notification.query.filter_by(
        user_id=current_user.id,
        is_read=False
    ).update({'is_read': True})
    db.session.commit()
    flash(f'{updated} notification(s) marked as read.', 'success')
    return redirect(url_for('account.notifications'))


@account_bp.route('/notifications/<int:notification_id>/delete', methods=['POST'])
@login_required
def delete_notification(notification_id):
    db.session.delete(_own_notification(notification_id))
    db.session.commit()
    flash('Notification deleted.', 'success')
    return redirect(request.referrer or url_for('account.notifications'))


@account_bp.route('/notifications/clear-read', methods=['POST'])
@login_required
def clear_read():
    deleted = Notification.query.filter_by(
        user_id=current_user.id,
        is_read=True
    ).delete()
    db.session.commit()
    flash(f'{deleted} read notification(s) cleared.', 'success')
    return redirect(url_for('account.notifications'))


# --- Wishlist ---
@account_bp.route('/wishlist')
@login_required
def wishlist():
    """Saved cakes; ids of deleted cakes are skipped."""
    saved = Wishlist.query.filter_by(user_id=current_user.id).first()
    ids = saved.items if saved else []
    products = {p.id: p for p in Product.query.filter(Product.id.in_(ids)).all()} if ids else {}
    cakes = [products[i] for i in ids if i in products]
    return render_template('account/wishlist.html', cakes=cakes)


@account_bp.route('/wishlist/<int:product_id>/add', methods=['POST'])
@login_required
def wishlist_add(product_id):
    product = Product.query.get_or_404(product_id)
    if Wishlist.for_user(current_user.id).add(product.id):
        flash(f'{product.name} saved to your wishlist.', 'success')
    db.session.commit()
    return redirect(request.referrer or url_for('account.wishlist'))


@account_bp.route('/wishlist/<int:product_id>/remove', methods=['POST'])
@login_required
def wishlist_remove(product_id):
    Wishlist.for_user(current_user.id).remove(product_id)
    db.session.commit()
    flash('Removed from wishlist.', 'success')
    return redirect(request.referrer or url_for('account.wishlist'))


@account_bp.route('/wishlist/<int:product_id>/move-to-cart', methods=['POST'])
@login_required
def wishlist_move_to_cart(product_id):
    product = Product.query.get_or_404(product_id)
    if not product.in_stock:
        flash(f'Sorry, {product.name} is out of stock.', 'warning')
        return redirect(url_for('account.wishlist'))
    default_weight = (product.weights or [{}])[0].get('weight', '')
    Cart.from_session().add(product, 1, weight=default_weight)
    Wishlist.for_user(current_user.id).remove(product.id)
    db.session.commit()
    flash(f'{product.name} moved to your cart.', 'success')
    return redirect(url_for('account.wishlist'))


# --- Custom requests ---
@account_bp.route('/custom-requests')
@login_required
def my_requests():
    requests = CustomRequest.query.filter_by(
        user_id=current_user.id
    ).order_by(CustomRequest.created_at.desc()).all()
    return render_template('account/custom_requests.html', requests=requests)
