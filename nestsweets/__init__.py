"""Flask application factory."""

import logging
import os
from flask import Flask, render_template
from .config import config
from .extensions import db, migrate, login_manager, bcrypt, csrf, mail


def configure_logging(app):
    """Attach a single stream handler to the package logger."""
    logger = logging.getLogger('nestsweets')
    if logger.hasHandlers():
        logger.handlers.clear()
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(levelname)s - %(name)s - %(message)s'
    ))
    logger.addHandler(handler)
    logger.setLevel(app.config.get('LOG_LEVEL', 'INFO'))


def create_app(config_name=None):
    """Create and configure the Flask application."""
    if config_name is None:
        config_name = os.environ.get('FLASK_CONFIG', 'development')

    app = Flask(__name__)
    app.config.from_object(config[config_name])
    configure_logging(app)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    bcrypt.init_app(app)
    csrf.init_app(app)
    mail.init_app(app)

    # Create upload directories
    upload_dirs = ['products', 'testimonials', 'custom_requests', 'content']
    for dir_name in upload_dirs:
        dir_path = os.path.join(app.config['UPLOAD_FOLDER'], dir_name)
        os.makedirs(dir_path, exist_ok=True)

    # Register blueprints
    from .routes import register_blueprints
    register_blueprints(app)

    # User loader for Flask-Login
    from .models import User

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, int(user_id))

    # Error handlers
    @app.errorhandler(404)
    def not_found_error(error):
        return render_template('errors/404.html'), 404

    @app.errorhandler(403)
    def forbidden_error(error):
        return render_template('errors/403.html'), 403

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()
        return render_template('errors/500.html'), 500

    # Template filters
    from .utils.pricing import get_currency_symbol

    @app.template_filter('money')
    def money_filter(value, currency='INR'):
        return f'{get_currency_symbol(currency)}{float(value or 0):.2f}'

    @app.template_filter('format_date')
    def format_date_filter(value, format='%b %d, %Y'):
        if not value:
            return ''
        if isinstance(value, str):
            return value
        return value.strftime(format)

    # Context processors
    @app.context_processor
    def inject_globals():
        from flask_login import current_user
        from .models import Announcement, Notification
        from .models.settings import load_site_settings
        from .utils.cart import Cart

        settings = load_site_settings()
        unread_count = 0
        if current_user.is_authenticated:
            unread_count = Notification.query.filter_by(
                user_id=current_user.id,
                is_read=False
            ).count()
        header_announcements = Announcement.query.filter_by(
            is_active=True,
            show_on_header=True
        ).order_by(Announcement.created_at.desc()).limit(3).all()
        return dict(
            cart_count=Cart.from_session().count,
            unread_count=unread_count,
            site_settings=settings,
            currency_symbol=get_currency_symbol(settings['currency']),
            header_announcements=header_announcements,
        )

    return app
