"""Announcement model."""

from datetime import datetime
from nestsweets.extensions import db


class Announcement(db.Model):
    """Store-wide announcement, optionally pinned to the header bar."""
    __tablename__ = 'announcements'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    message = db.Column(db.Text, nullable=False)
    type = db.Column(db.String(20), default='info')  # info, promo, system
    link = db.Column(db.String(255))
    is_active = db.Column(db.Boolean, default=True)
    show_on_header = db.Column(db.Boolean, default=False)
    created_by = db.Column(db.Integer, db.ForeignKey('users.id'))
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f'<Announcement {self.title}>'
