"""User and role management (super admins only)."""

import logging
from flask import render_template, redirect, url_for, flash, request
from flask_login import login_required, current_user
from sqlalchemy import or_
from nestsweets.extensions import db
from nestsweets.models import User, Order
from nestsweets.utils.decorators import super_admin_required
from . import admin_bp

logger = logging.getLogger(__name__)


def _other_user(user_id, action):
    """Load a user other than the current one, or None after flashing."""
    user = User.query.get_or_404(user_id)
    if user.id == current_user.id:
        flash(f'You cannot {action} yourself.', 'danger')
        return None
    return user


@admin_bp.route('/users')
@login_required
@super_admin_required
def users():
    """User management."""
    role = request.args.get('role', '')
    search = request.args.get('search', '').strip()

    query = User.query

    if role:
        query = query.filter_by(role=role)

    if search:
        query = query.filter(
            or_(
                User.name.ilike(f'%{search}%'),
                User.email.ilike(f'%{search}%')
            )
        )

    counts = {
        'all': User.query.count(),
        'customer': User.query.filter_by(role='customer').count(),
        'admin': User.query.filter_by(role='admin').count(),
        'superadmin': User.query.filter_by(role='superadmin').count(),
    }

    return render_template('admin/users.html',
                         users=query.order_by(User.created_at.desc()).all(),
                         counts=counts,
                         current_role=role,
                         search=search)


@admin_bp.route('/users/<int:user_id>')
@login_required
@super_admin_required
def user_detail(user_id):
    """User detail view."""
    user = User.query.get_or_404(user_id)
    orders = Order.query.filter_by(user_id=user_id).order_by(
        Order.created_at.desc()
    ).limit(10).all()

    return render_template('admin/user_detail.html', user=user, orders=orders)


@admin_bp.route('/users/<int:user_id>/grant-admin', methods=['POST'])
@login_required
@super_admin_required
def grant_admin(user_id):
    user = _other_user(user_id, 'change the role of')
    if user is None:
        return redirect(url_for('admin.users'))
    if user.is_admin():
        flash(f'{user.name} is already an admin.', 'info')
        return redirect(url_for('admin.users'))

    user.role = 'admin'
    db.session.commit()
    logger.info('User %s granted admin by %s', user.id, current_user.id)
    flash(f'{user.name} is now an admin.', 'success')
    return redirect(url_for('admin.users'))


@admin_bp.route('/users/<int:user_id>/revoke-admin', methods=['POST'])
@login_required
@super_admin_required
def revoke_admin(user_id):
    user = _other_user(user_id, 'change the role of')
    if user is None:
        return redirect(url_for('admin.users'))

    user.role = 'customer'
    db.session.commit()
    logger.info('Admin rights of user %s revoked by %s', user.id, current_user.id)
    flash(f'{user.name} is now a customer.', 'success')
    return redirect(url_for('admin.users'))


@admin_bp.route('/users/<int:user_id>/toggle-status', methods=['POST'])
@login_required
@super_admin_required
def toggle_user_status(user_id):
    """Activate/deactivate user."""
    user = _other_user(user_id, 'deactivate')
    if user is None:
        return redirect(url_for('admin.users'))

    user.is_active = not user.is_active
    db.session.commit()

    status = 'activated' if user.is_active else 'deactivated'
    flash(f'User has been {status}.', 'success')
    return redirect(url_for('admin.user_detail', user_id=user_id))


@admin_bp.route('/users/<int:user_id>/delete', methods=['POST'])
@login_required
@super_admin_required
def delete_user(user_id):
    user = _other_user(user_id, 'delete')
    if user is None:
        return redirect(url_for('admin.users'))

    # Orders and requests outlive the account
    Order.query.filter_by(user_id=user.id).update({'user_id': None})
    user.custom_requests.update({'user_id': None})
    db.session.delete(user)
    db.session.commit()
    logger.info('User %s deleted by %s', user_id, current_user.id)
    flash('User deleted.', 'success')
    return redirect(url_for('admin.users'))
