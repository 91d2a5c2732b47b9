"""Notification models."""

from datetime import datetime
from nestsweets.extensions import db


class Notification(db.Model):
    """User notifications."""
    __tablename__ = 'notifications'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    title = db.Column(db.String(200), nullable=False)
    message = db.Column(db.Text, nullable=False)
    type = db.Column(db.String(50), default='system')  # order, product, system, promo, custom_request, review
    link = db.Column(db.String(255))  # Optional URL to redirect
    extra = db.Column(db.JSON)
    is_read = db.Column(db.Boolean, default=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'message': self.message,
            'type': self.type or 'system',
            'link': self.link,
            'is_read': self.is_read,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f'<Notification {self.title}>'


class AdminNotification(db.Model):
    """Back-office alert for new orders, custom requests and messages."""
    __tablename__ = 'admin_notifications'

    id = db.Column(db.Integer, primary_key=True)
    type = db.Column(db.String(50), nullable=False)  # new_order, custom_cake_request, contact_message
    ref = db.Column(db.String(50))
    target_id = db.Column(db.Integer)
    customer_name = db.Column(db.String(100))
    customer_phone = db.Column(db.String(20))
    summary = db.Column(db.String(500))
    status = db.Column(db.String(20), default='unread')
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f'<AdminNotification {self.type} {self.ref}>'
