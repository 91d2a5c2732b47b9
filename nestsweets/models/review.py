"""Review and testimonial models."""

from datetime import datetime
from nestsweets.extensions import db


class Review(db.Model):
    """Product review; shown publicly once approved."""
    __tablename__ = 'reviews'

    id = db.Column(db.Integer, primary_key=True)
    product_id = db.Column(db.Integer, db.ForeignKey('products.id', ondelete='SET NULL'), index=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'))
    order_id = db.Column(db.Integer, db.ForeignKey('orders.id'))
    customer_name = db.Column(db.String(100), nullable=False)
    rating = db.Column(db.Integer, nullable=False)  # 1-5
    comment = db.Column(db.Text)
    approved = db.Column(db.Boolean, default=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    @property
    def cake_name(self):
        return self.product.name if self.product else 'Unknown Cake'

    def __repr__(self):
        return f'<Review {self.rating} stars>'


class Testimonial(db.Model):
    """Customer quote for the home page."""
    __tablename__ = 'testimonials'

    id = db.Column(db.Integer, primary_key=True)
    customer_name = db.Column(db.String(100), nullable=False)
    customer_image = db.Column(db.String(255))
    rating = db.Column(db.Integer, default=5)
    comment = db.Column(db.Text, nullable=False)
    cake_name = db.Column(db.String(150))
    approved = db.Column(db.Boolean, default=True)
    featured = db.Column(db.Boolean, default=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f'<Testimonial {self.customer_name}>'
