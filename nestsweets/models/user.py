"""User model."""

from datetime import datetime
from flask_login import UserMixin
from nestsweets.extensions import db, bcrypt


class User(UserMixin, db.Model):
    """Store account: customers, admins and super admins."""
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(120), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    name = db.Column(db.String(100), nullable=False)
    phone = db.Column(db.String(20))
    photo_url = db.Column(db.String(255))
    role = db.Column(db.String(20), nullable=False, default='customer')  # customer, admin, superadmin
    is_active = db.Column(db.Boolean, default=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    orders = db.relationship('Order', backref='customer', lazy='dynamic')
    custom_requests = db.relationship('CustomRequest', backref='customer', lazy='dynamic')
    notifications = db.relationship('Notification', backref='user', lazy='dynamic',
                                    cascade='all, delete-orphan')
    wishlist = db.relationship('Wishlist', backref='user', uselist=False,
                               cascade='all, delete-orphan')

    def set_password(self, password):
        """Hash and set the password."""
        self.password_hash = bcrypt.generate_password_hash(password).decode('utf-8')

    def check_password(self, password):
        """Check if password matches."""
        return bcrypt.check_password_hash(self.password_hash, password)

    def is_admin(self):
        """Admins and super admins can use the back office."""
        return self.role in ('admin', 'superadmin')

    def is_super_admin(self):
        return self.role == 'superadmin'

    def is_customer(self):
        return self.role == 'customer'

    def __repr__(self):
        return f'<User {self.email}>'
