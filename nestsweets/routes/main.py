"""Main public routes."""

from flask import Blueprint, render_template, request, current_app, redirect, url_for, flash, abort
from sqlalchemy import or_
from nestsweets.extensions import db
from nestsweets.models import Product, Review, Testimonial, ContentBlock, ContactMessage
from nestsweets.models.settings import load_record
from nestsweets.models.content import POLICY_TYPES
from nestsweets.forms.main import ContactForm
from nestsweets.utils.notifications import raise_admin_alert

main_bp = Blueprint('main', __name__)

SORT_OPTIONS = {
    'newest': Product.created_at.desc(),
    'price_low': Product.base_price.asc(),
    'price_high': Product.base_price.desc(),
    'popular': Product.order_count.desc(),
}

# URL slug -> policy type
POLICY_PAGES = {
    'privacy': 'privacy',
    'terms': 'terms',
    'refund': 'refund',
    'cookies': 'cookie',
}


@main_bp.route('/')
def index():
    """Homepage."""
    hero_slides = ContentBlock.section_items('hero_slides', active_only=True)
    features = ContentBlock.section_items('features', active_only=True)

    featured_products = Product.query.filter_by(
        is_featured=True
    ).order_by(Product.created_at.desc()).limit(8).all()

    testimonials = Testimonial.query.filter_by(
        approved=True,
        featured=True
    ).order_by(Testimonial.created_at.desc()).limit(6).all()

    return render_template('main/index.html',
                         hero_slides=hero_slides,
                         features=features,
                         featured_products=featured_products,
                         testimonials=testimonials,
                         stats=load_record('stats'))


@main_bp.route('/cakes')
def cakes():
    """Cake list with category filter, search and sort."""
    page = request.args.get('page', 1, type=int)
    search = request.args.get('search', '').strip()
    category = request.args.get('category', '')
    sort = request.args.get('sort', 'newest')

    query = Product.query

    if category:
        query = query.filter(Product.category == category)

    if search:
        query = query.filter(
            or_(
                Product.name.ilike(f'%{search}%'),
                Product.description.ilike(f'%{search}%'),
                Product.category.ilike(f'%{search}%')
            )
        )

    query = query.order_by(SORT_OPTIONS.get(sort, SORT_OPTIONS['newest']))

    pagination = query.paginate(
        page=page,
        per_page=current_app.config.get('ITEMS_PER_PAGE', 12),
        error_out=False
    )

    categories = [c[0] for c in db.session.query(Product.category).filter(
        Product.category.isnot(None)
    ).distinct().order_by(Product.category).all()]

    return render_template('main/cakes.html',
                         cakes=pagination.items,
                         pagination=pagination,
                         categories=categories,
                         search=search,
                         current_category=category,
                         current_sort=sort)


@main_bp.route('/cakes/<slug>')
def cake_detail(slug):
    """Cake page with approved reviews and related cakes."""
    cake = Product.query.filter_by(slug=slug).first_or_404()

    reviews = cake.reviews.filter_by(approved=True).order_by(Review.created_at.desc()).all()
    average_rating = round(sum(r.rating for r in reviews) / len(reviews), 1) if reviews else 0

    related = []
    if cake.category:
        related = Product.query.filter(
            Product.category == cake.category,
            Product.id != cake.id
        ).order_by(Product.order_count.desc()).limit(4).all()

    return render_template('main/cake_detail.html',
                         cake=cake,
                         reviews=reviews,
                         average_rating=average_rating,
                         related=related)


@main_bp.route('/about')
def about():
    return render_template('main/about.html',
                         about=load_record('about_page'),
                         why_choose=ContentBlock.section_items('why_choose', active_only=True),
                         stats=load_record('stats'))


@main_bp.route('/services')
def services():
    return render_template('main/services.html',
                         page=load_record('services_page'),
                         services=ContentBlock.section_items('services', active_only=True))


@main_bp.route('/<any(privacy, terms, refund, cookies):page>')
def policy(page):
    """Policy pages rendered from the policies content section."""
    policy_type = POLICY_PAGES.get(page)
    if policy_type is None:
        abort(404)
    block = ContentBlock.get_policy(policy_type)
    data = block.data if block else {'title': POLICY_TYPES[policy_type], 'content': ''}
    return render_template('main/policy.html', policy=data)


@main_bp.route('/contact', methods=['GET', 'POST'])
def contact():
    """Contact page."""
    form = ContactForm()
    if form.validate_on_submit():
        message = ContactMessage(
            name=form.name.data,
            email=form.email.data,
            phone=form.phone.data,
            subject=form.subject.data,
            message=form.message.data
        )
        db.session.add(message)
        db.session.commit()

        raise_admin_alert(
            'contact_message',
            target_id=message.id,
            customer_name=message.name,
            customer_phone=message.phone,
            summary=message.subject
        )

        flash('Thank you for your message! We will get back to you soon.', 'success')
        return redirect(url_for('main.contact'))

    return render_template('main/contact.html', form=form)
