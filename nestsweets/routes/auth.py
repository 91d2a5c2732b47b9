"""Authentication routes."""

import logging
from flask import Blueprint, render_template, redirect, url_for, flash, request, session
from flask_login import login_user, logout_user, login_required, current_user
from nestsweets.extensions import db
from nestsweets.models import User, Order
from nestsweets.forms.auth import LoginForm, RegistrationForm, ProfileForm, ForgotPasswordForm

auth_bp = Blueprint('auth', __name__)

logger = logging.getLogger(__name__)

GUEST_ORDERS_KEY = 'guest_orders'


def claim_guest_orders(user):
    """Attach orders placed as a guest in this session to the user."""
    refs = session.pop(GUEST_ORDERS_KEY, [])
    if not refs:
        return 0
    orders = Order.query.filter(Order.order_ref.in_(refs), Order.user_id.is_(None)).all()
    for order in orders:
        order.user_id = user.id
        order.is_guest = False
    db.session.commit()
    if orders:
        logger.info('User %s claimed %d guest orders', user.id, len(orders))
    return len(orders)


def _is_safe_next(target):
    return bool(target) and target.startswith('/') and not target.startswith('//')


@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    """User login."""
    if current_user.is_authenticated:
        return redirect(url_for('main.index'))

    form = LoginForm()
    if form.validate_on_submit():
        user = User.query.filter_by(email=form.email.data.lower()).first()

        if user and user.check_password(form.password.data):
            if not user.is_active:
                flash('Your account has been deactivated. Please contact support.', 'danger')
                return render_template('auth/login.html', form=form)

            login_user(user, remember=form.remember.data)
            claimed = claim_guest_orders(user)
            flash(f'Welcome back, {user.name}!', 'success')
            if claimed:
                flash(f'{claimed} guest order(s) were added to your account.', 'info')

            next_page = request.args.get('next')
            if _is_safe_next(next_page):
                return redirect(next_page)

            if user.is_admin():
                return redirect(url_for('admin.dashboard'))
            return redirect(url_for('main.index'))
        else:
            flash('Invalid email or password.', 'danger')

    return render_template('auth/login.html', form=form)


@auth_bp.route('/register', methods=['GET', 'POST'])
def register():
    """Customer registration."""
    if current_user.is_authenticated:
        return redirect(url_for('main.index'))

    form = RegistrationForm()
    if form.validate_on_submit():
        user = User(
            email=form.email.data.lower(),
            name=form.name.data,
            phone=form.phone.data,
            role='customer'
        )
        user.set_password(form.password.data)

        db.session.add(user)
        db.session.commit()

        login_user(user)
        claim_guest_orders(user)
        flash('Registration successful! Welcome to NestSweets.', 'success')
        return redirect(url_for('main.index'))

    return render_template('auth/register.html', form=form)


@auth_bp.route('/logout')
@login_required
def logout():
    """User logout."""
    logout_user()
    flash('You have been logged out.', 'info')
    return redirect(url_for('main.index'))


@auth_bp.route('/profile', methods=['GET', 'POST'])
@login_required
def profile():
    """Edit profile."""
    form = ProfileForm(obj=current_user)
    if form.validate_on_submit():
        current_user.name = form.name.data
        current_user.phone = form.phone.data
        current_user.photo_url = form.photo_url.data or None
        db.session.commit()
        flash('Profile updated.', 'success')
        return redirect(url_for('auth.profile'))

    return render_template('auth/profile.html', form=form)


@auth_bp.route('/forgot-password', methods=['GET', 'POST'])
def forgot_password():
    """Forgot password - request reset."""
    if current_user.is_authenticated:
        return redirect(url_for('main.index'))

    form = ForgotPasswordForm()
    if form.validate_on_submit():
        user = User.query.filter_by(email=form.email.data.lower()).first()
        if user:
            logger.info('Password reset requested for user %s', user.id)

        # Same message whether or not the account exists
        flash('If an account exists with that email, you will receive a password reset link.', 'info')
        return redirect(url_for('auth.login'))

    return render_template('auth/forgot_password.html', form=form)
