"""Wishlist model."""

from datetime import datetime
from nestsweets.extensions import db


class Wishlist(db.Model):
    """Saved product ids, one list per user."""
    __tablename__ = 'wishlists'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), unique=True, nullable=False)
    items = db.Column(db.JSON, default=list)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    @classmethod
    def for_user(cls, user_id):
        """Get the user's wishlist, creating it if needed."""
        wishlist = cls.query.filter_by(user_id=user_id).first()
        if wishlist is None:
            wishlist = cls(user_id=user_id, items=[])
            db.session.add(wishlist)
        return wishlist

    def has(self, product_id):
        return product_id in (self.items or [])

    def add(self, product_id):
        if not self.has(product_id):
            # Reassign so the JSON column is flagged dirty
            self.items = list(self.items or []) + [product_id]
            return True
        return False

    def remove(self, product_id):
        if self.has(product_id):
            self.items = [i for i in self.items if i != product_id]
            return True
        return False

    def toggle(self, product_id):
        """Add or remove; returns True when the product is now saved."""
        if self.has(product_id):
            self.remove(product_id)
            return False
        self.add(product_id)
        return True

    def __repr__(self):
        return f'<Wishlist user={self.user_id}>'
