"""Cart routes. The cart lives in the session so guests can shop."""

from flask import Blueprint, current_app, render_template, redirect, url_for, flash, request, jsonify
from nestsweets.extensions import db
from nestsweets.models import Product
from nestsweets.models.settings import load_site_settings
from nestsweets.utils.cart import Cart
from nestsweets.utils.pricing import calculate_order_total, amount_for_free_delivery
from nestsweets.utils.stock import check_stock_availability
from nestsweets.utils.whatsapp import whatsapp_url, cart_message

cart_bp = Blueprint('cart', __name__)


def _wants_json():
    return request.headers.get('X-Requested-With') == 'XMLHttpRequest'


@cart_bp.route('/')
def view_cart():
    """View shopping cart."""
    cart = Cart.from_session()
    lines = cart.items()
    settings = load_site_settings()
    subtotal = sum(line.subtotal for line in lines)
    totals = calculate_order_total(subtotal, settings)

    store_whatsapp = settings.get('whatsapp') or current_app.config.get('ADMIN_WHATSAPP')
    wa_url = None
    if lines and settings.get('enable_whatsapp_orders', True) and store_whatsapp:
        wa_url = whatsapp_url(store_whatsapp, cart_message(lines, totals, settings.get('currency', 'INR')))

    return render_template('cart/cart.html',
                         whatsapp_url=wa_url,
                         lines=lines,
                         totals=totals,
                         free_delivery_gap=amount_for_free_delivery(subtotal, settings),
                         below_minimum=subtotal < float(settings.get('minimum_order') or 0))


@cart_bp.route('/add', methods=['GET', 'POST'])
def add_to_cart():
    """Add product to cart."""
    if request.method == 'GET':
        return redirect(url_for('cart.view_cart'))

    product_id = request.form.get('product_id', type=int)
    quantity = request.form.get('quantity', 1, type=int)
    weight = request.form.get('weight', '')
    flavor = request.form.get('flavor', '')
    customization = request.form.get('customization', '')

    product = db.session.get(Product, product_id) if product_id else None
    if product is None:
        flash('This cake is no longer available.', 'danger')
        return redirect(url_for('main.cakes'))

    if not product.in_stock or not check_stock_availability(product, quantity):
        flash(f'Sorry, {product.name} is out of stock.', 'danger')
        return redirect(request.referrer or url_for('main.cake_detail', slug=product.slug))

    cart = Cart.from_session()
    cart.add(product, quantity, weight=weight, flavor=flavor, customization=customization)

    if _wants_json():
        return jsonify({'success': True, 'cart_count': cart.count})

    flash(f'{product.name} added to cart!', 'success')
    return redirect(request.referrer or url_for('main.cake_detail', slug=product.slug))


@cart_bp.route('/update', methods=['POST'])
def update_cart():
    """Update cart line quantity."""
    key = request.form.get('key', '')
    quantity = request.form.get('quantity', 0, type=int)

    cart = Cart.from_session()
    if not cart.update(key, quantity):
        flash('That item is no longer in your cart.', 'warning')
        return redirect(url_for('cart.view_cart'))

    message = 'Item removed from cart.' if quantity <= 0 else 'Cart updated.'
    if _wants_json():
        return jsonify({'success': True, 'cart_count': cart.count, 'message': message})

    flash(message, 'success')
    return redirect(url_for('cart.view_cart'))


@cart_bp.route('/remove', methods=['POST'])
def remove_from_cart():
    """Remove a line from the cart."""
    cart = Cart.from_session()
    cart.remove(request.form.get('key', ''))

    if _wants_json():
        return jsonify({'success': True, 'cart_count': cart.count})

    flash('Item removed from cart.', 'success')
    return redirect(url_for('cart.view_cart'))


@cart_bp.route('/clear', methods=['POST'])
def clear_cart():
    """Clear all items from cart."""
    Cart.from_session().clear()
    flash('Cart cleared.', 'success')
    return redirect(url_for('cart.view_cart'))
