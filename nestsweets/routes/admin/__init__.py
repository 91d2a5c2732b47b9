"""Admin back office. Every view requires an admin or super admin."""

from flask import Blueprint

admin_bp = Blueprint('admin', __name__)

from . import dashboard, orders, catalog, content, users  # noqa: E402,F401
