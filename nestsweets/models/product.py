"""Product (cake) model."""

from datetime import datetime
from slugify import slugify
from nestsweets.extensions import db


class Product(db.Model):
    """A cake in the catalog."""
    __tablename__ = 'products'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(150), nullable=False)
    slug = db.Column(db.String(170), unique=True, index=True)
    description = db.Column(db.Text)
    category = db.Column(db.String(100), index=True)
    base_price = db.Column(db.Float, nullable=False)
    # [{'weight': '1 kg', 'price': 900, 'servings': '8-10'}]
    weights = db.Column(db.JSON, default=list)
    flavors = db.Column(db.JSON, default=list)
    eggless = db.Column(db.Boolean, default=False)
    image_url = db.Column(db.String(255))
    images = db.Column(db.JSON, default=list)
    # None means stock is not tracked
    stock = db.Column(db.Integer)
    in_stock = db.Column(db.Boolean, default=True)
    is_featured = db.Column(db.Boolean, default=False)
    is_popular = db.Column(db.Boolean, default=False)
    is_bestseller = db.Column(db.Boolean, default=False)
    order_count = db.Column(db.Integer, default=0)
    rating = db.Column(db.Float, default=0.0)
    review_count = db.Column(db.Integer, default=0)
    advance_booking_days = db.Column(db.Integer, default=0)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    reviews = db.relationship('Review', backref='product', lazy='dynamic')
    order_items = db.relationship('OrderItem', backref='product', lazy='dynamic')

    def generate_slug(self):
        """Generate a unique slug for the product."""
        base_slug = slugify(self.name) if self.name else 'cake'
        slug = base_slug
        counter = 1
        while Product.query.filter(Product.slug == slug, Product.id != self.id).first() is not None:
            slug = f'{base_slug}-{counter}'
            counter += 1
        self.slug = slug

    def price_for(self, weight=None):
        """Price of the given weight option, falling back to the base price."""
        for option in self.weights or []:
            if option.get('weight') == weight:
                return float(option.get('price') or self.base_price)
        return float(self.base_price)

    @property
    def thumbnail(self):
        if self.image_url:
            return self.image_url
        return (self.images or [None])[0]

    def update_rating(self):
        """Recompute rating from approved reviews."""
        approved = self.reviews.filter_by(approved=True).all()
        if approved:
            self.rating = round(sum(r.rating for r in approved) / len(approved), 1)
            self.review_count = len(approved)
        else:
            self.rating = 0.0
            self.review_count = 0

    def __repr__(self):
        return f'<Product {self.name}>'
