"""JSON API endpoints for AJAX operations."""

from flask import Blueprint, jsonify, request
from flask_login import login_required, current_user
from nestsweets.extensions import db
from nestsweets.models import Product, Notification, Wishlist
from nestsweets.models.settings import load_site_settings
from nestsweets.utils.cart import Cart
from nestsweets.utils.pricing import is_pincode_allowed, calculate_delivery_fee
from nestsweets.utils.stock import check_stock_availability

api_bp = Blueprint('api', __name__)


@api_bp.route('/cart/count')
def cart_count():
    return jsonify({'cart_count': Cart.from_session().count})


@api_bp.route('/cart/add', methods=['POST'])
def add_to_cart():
    """Add product to cart via AJAX."""
    data = request.get_json(silent=True) or {}
    product_id = data.get('product_id')
    try:
        quantity = int(data.get('quantity') or 1)
    except (TypeError, ValueError):
        return jsonify({'success': False, 'message': 'Invalid quantity'}), 400
    if quantity < 1:
        return jsonify({'success': False, 'message': 'Invalid quantity'}), 400

    product = db.session.get(Product, product_id) if product_id else None
    if not product or not product.in_stock:
        return jsonify({'success': False, 'message': 'Product not available'}), 400
    if not check_stock_availability(product, quantity):
        return jsonify({'success': False, 'message': f'Only {product.stock} left in stock'}), 400

    cart = Cart.from_session()
    cart.add(product, quantity,
             weight=data.get('weight', ''),
             flavor=data.get('flavor', ''),
             customization=data.get('customization', ''))
    return jsonify({
        'success': True,
        'message': f'{product.name} added to cart',
        'cart_count': cart.count
    })


@api_bp.route('/notifications')
@login_required
def notifications():
    """Latest notifications and unread count for the header bell."""
    items = Notification.query.filter_by(
        user_id=current_user.id
    ).order_by(Notification.created_at.desc()).limit(10).all()

    unread_count = Notification.query.filter_by(
        user_id=current_user.id,
        is_read=False
    ).count()

    return jsonify({
        'notifications': [n.to_dict() for n in items],
        'unread_count': unread_count
    })


@api_bp.route('/notifications/<int:notification_id>/read', methods=['POST'])
@login_required
def mark_notification_read(notification_id):
    notification = Notification.query.filter_by(
        id=notification_id,
        user_id=current_user.id
    ).first()
    if not notification:
        return jsonify({'success': False, 'message': 'Notification not found'}), 404

    notification.is_read = True
    db.session.commit()
    return jsonify({'success': True})


@api_bp.route('/wishlist/toggle', methods=['POST'])
@login_required
def toggle_wishlist():
    data = request.get_json(silent=True) or {}
    product = db.session.get(Product, data.get('product_id')) if data.get('product_id') else None
    if not product:
        return jsonify({'success': False, 'message': 'Product not found'}), 404

    saved = Wishlist.for_user(current_user.id).toggle(product.id)
    db.session.commit()
    return jsonify({'success': True, 'in_wishlist': saved})


@api_bp.route('/pincode/check')
def check_pincode():
    """Whether the store delivers to a pincode, and the fee for an amount."""
    pincode = request.args.get('pincode', '').strip()
    amount = request.args.get('amount', 0, type=float)
    settings = load_site_settings()
    allowed = is_pincode_allowed(pincode, settings.get('allowed_pincodes'))
    return jsonify({
        'pincode': pincode,
        'deliverable': allowed,
        'delivery_fee': calculate_delivery_fee(amount, settings) if allowed else None
    })
