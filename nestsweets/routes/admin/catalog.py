"""Products, reviews and testimonials."""

import logging
from flask import render_template, redirect, url_for, flash, request
from flask_login import login_required
from nestsweets.extensions import db
from nestsweets.models import Product, Review, Testimonial
from nestsweets.forms.admin import (ProductForm, ReviewForm, TestimonialForm,
                                    parse_weights, parse_list, format_weights)
from nestsweets.utils.decorators import admin_required
from nestsweets.utils.notifications import notify_new_product
from nestsweets.utils.uploads import save_upload
from . import admin_bp

logger = logging.getLogger(__name__)


def _fill_product(product, form):
    product.name = form.name.data
    product.description = form.description.data
    product.category = form.category.data
    product.base_price = form.base_price.data
    product.weights = parse_weights(form.weights.data, form.base_price.data)
    product.flavors = parse_list(form.flavors.data)
    product.eggless = form.eggless.data
    product.stock = form.stock.data
    product.in_stock = form.in_stock.data and (product.stock is None or product.stock > 0)
    product.is_featured = form.is_featured.data
    product.is_popular = form.is_popular.data
    product.is_bestseller = form.is_bestseller.data
    product.advance_booking_days = form.advance_booking_days.data or 0

    uploaded = save_upload(form.image.data, 'products')
    if uploaded:
        product.image_url = uploaded
    elif form.image_url.data:
        product.image_url = form.image_url.data
    if product.image_url and product.image_url not in (product.images or []):
        product.images = [product.image_url] + list(product.images or [])


# --- Products ---
@admin_bp.route('/products')
@login_required
@admin_required
def products():
    search = request.args.get('search', '').strip()
    category = request.args.get('category', '')

    all_products = Product.query.all()
    stats = {
        'total': len(all_products),
        'in_stock': sum(1 for p in all_products if p.in_stock),
        'out_of_stock': sum(1 for p in all_products if not p.in_stock),
        'featured': sum(1 for p in all_products if p.is_featured),
        'bestseller': sum(1 for p in all_products if p.is_bestseller),
    }

    query = Product.query
    if search:
        query = query.filter(Product.name.ilike(f'%{search}%'))
    if category:
        query = query.filter_by(category=category)

    categories = sorted({p.category for p in all_products if p.category})
    return render_template('admin/products.html',
                         products=query.order_by(Product.created_at.desc()).all(),
                         stats=stats,
                         categories=categories,
                         search=search,
                         current_category=category)


@admin_bp.route('/products/add', methods=['GET', 'POST'])
@login_required
@admin_required
def add_product():
    """Create a cake and announce it to every user."""
    form = ProductForm()
    if form.validate_on_submit():
        product = Product()
        _fill_product(product, form)
        product.generate_slug()
        db.session.add(product)
        db.session.commit()
        logger.info('Product %s created', product.slug)

        sent = notify_new_product(product)
        flash(f'{product.name} added.' + (f' {sent} users notified.' if sent else ''), 'success')
        return redirect(url_for('admin.products'))

    return render_template('admin/product_form.html', form=form, product=None)


@admin_bp.route('/products/<int:product_id>/edit', methods=['GET', 'POST'])
@login_required
@admin_required
def edit_product(product_id):
    product = Product.query.get_or_404(product_id)
    form = ProductForm(obj=product)
    if request.method == 'GET':
        form.weights.data = format_weights(product.weights)
        form.flavors.data = ', '.join(product.flavors or [])

    if form.validate_on_submit():
        old_name = product.name
        _fill_product(product, form)
        if product.name != old_name:
            product.generate_slug()
        db.session.commit()
        flash(f'{product.name} updated.', 'success')
        return redirect(url_for('admin.products'))

    return render_template('admin/product_form.html', form=form, product=product)


@admin_bp.route('/products/<int:product_id>/delete', methods=['POST'])
@login_required
@admin_required
def delete_product(product_id):
    product = Product.query.get_or_404(product_id)
    db.session.delete(product)
    db.session.commit()
    flash('Product deleted.', 'success')
    return redirect(url_for('admin.products'))


@admin_bp.route('/products/<int:product_id>/toggle-stock', methods=['POST'])
@login_required
@admin_required
def toggle_stock(product_id):
    product = Product.query.get_or_404(product_id)
    product.in_stock = not product.in_stock
    db.session.commit()
    flash(f'{product.name} is now {"in stock" if product.in_stock else "out of stock"}.', 'success')
    return redirect(request.referrer or url_for('admin.products'))


@admin_bp.route('/products/<int:product_id>/toggle-featured', methods=['POST'])
@login_required
@admin_required
def toggle_product_featured(product_id):
    product = Product.query.get_or_404(product_id)
    product.is_featured = not product.is_featured
    db.session.commit()
    flash(f'{product.name} is now {"featured" if product.is_featured else "unfeatured"}.', 'success')
    return redirect(request.referrer or url_for('admin.products'))


# --- Review Moderation ---
@admin_bp.route('/reviews', methods=['GET', 'POST'])
@login_required
@admin_required
def reviews():
    """Review moderation; posting adds an approved review."""
    form = ReviewForm()
    form.product_id.choices = [(p.id, p.name) for p in Product.query.order_by(Product.name).all()]

    if form.validate_on_submit():
        product = db.session.get(Product, form.product_id.data)
        db.session.add(Review(
            product_id=product.id,
            customer_name=form.customer_name.data,
            rating=form.rating.data,
            comment=form.comment.data,
            approved=True
        ))
        db.session.flush()
        product.update_rating()
        db.session.commit()
        flash('Review added.', 'success')
        return redirect(url_for('admin.reviews'))

    items = Review.query.order_by(Review.created_at.desc()).all()
    return render_template('admin/reviews.html', reviews=items, form=form)


@admin_bp.route('/reviews/<int:review_id>/toggle', methods=['POST'])
@login_required
@admin_required
def toggle_review(review_id):
    """Approve or hide a review."""
    review = Review.query.get_or_404(review_id)
    review.approved = not review.approved
    db.session.flush()
    if review.product:
        review.product.update_rating()
    db.session.commit()

    flash(f'Review is now {"approved" if review.approved else "hidden"}.', 'success')
    return redirect(url_for('admin.reviews'))


@admin_bp.route('/reviews/<int:review_id>/delete', methods=['POST'])
@login_required
@admin_required
def delete_review(review_id):
    """Delete a review."""
    review = Review.query.get_or_404(review_id)
    product = review.product

    db.session.delete(review)
    db.session.flush()
    if product:
        product.update_rating()
    db.session.commit()

    flash('Review deleted successfully.', 'success')
    return redirect(url_for('admin.reviews'))


# --- Testimonials ---
@admin_bp.route('/testimonials')
@login_required
@admin_required
def testimonials():
    items = Testimonial.query.order_by(Testimonial.created_at.desc()).all()
    return render_template('admin/testimonials.html', testimonials=items)


@admin_bp.route('/testimonials/add', methods=['GET', 'POST'])
@admin_bp.route('/testimonials/<int:testimonial_id>/edit', methods=['GET', 'POST'])
@login_required
@admin_required
def testimonial_form(testimonial_id=None):
    testimonial = Testimonial.query.get_or_404(testimonial_id) if testimonial_id else None
    form = TestimonialForm(obj=testimonial)

    if form.validate_on_submit():
        if testimonial is None:
            testimonial = Testimonial()
            db.session.add(testimonial)
        testimonial.customer_name = form.customer_name.data
        testimonial.rating = form.rating.data
        testimonial.comment = form.comment.data
        testimonial.cake_name = form.cake_name.data
        testimonial.approved = form.approved.data
        testimonial.featured = form.featured.data
        testimonial.customer_image = save_upload(form.image.data, 'testimonials') or \
            form.customer_image.data or None
        db.session.commit()
        flash('Testimonial saved.', 'success')
        return redirect(url_for('admin.testimonials'))

    return render_template('admin/testimonial_form.html', form=form, testimonial=testimonial)


@admin_bp.route('/testimonials/<int:testimonial_id>/<any(approved, featured):flag>', methods=['POST'])
@login_required
@admin_required
def toggle_testimonial(testimonial_id, flag):
    testimonial = Testimonial.query.get_or_404(testimonial_id)
    setattr(testimonial, flag, not getattr(testimonial, flag))
    db.session.commit()
    flash('Testimonial updated.', 'success')
    return redirect(url_for('admin.testimonials'))


@admin_bp.route('/testimonials/<int:testimonial_id>/delete', methods=['POST'])
@login_required
@admin_required
def delete_testimonial(testimonial_id):
    db.session.delete(Testimonial.query.get_or_404(testimonial_id))
    db.session.commit()
    flash('Testimonial deleted.', 'success')
    return redirect(url_for('admin.testimonials'))
