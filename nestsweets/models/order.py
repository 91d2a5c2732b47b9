"""Order models."""

from datetime import datetime
import uuid
from nestsweets.extensions import db

ORDER_STATUSES = ['pending', 'confirmed', 'preparing', 'out_for_delivery', 'delivered', 'cancelled']
PAYMENT_STATUSES = ['pending', 'paid', 'failed', 'refunded']
PAYMENT_METHODS = ['cod', 'online']

DELIVERY_SLOTS = {
    'morning': '9 AM - 12 PM',
    'afternoon': '12 PM - 4 PM',
    'evening': '4 PM - 8 PM',
}

# Tracking step -> status that completes it
TRACKING_STEPS = [
    ('placed', 'pending'),
    ('confirmed', 'confirmed'),
    ('preparing', 'preparing'),
    ('out_for_delivery', 'out_for_delivery'),
    ('delivered', 'delivered'),
]


class Order(db.Model):
    """Order model."""
    __tablename__ = 'orders'

    id = db.Column(db.Integer, primary_key=True)
    order_ref = db.Column(db.String(50), unique=True, nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), index=True)
    is_guest = db.Column(db.Boolean, default=False)

    # Customer info
    customer_name = db.Column(db.String(100), nullable=False)
    customer_phone = db.Column(db.String(20), nullable=False)
    customer_email = db.Column(db.String(120))
    delivery_address = db.Column(db.String(500))
    delivery_pincode = db.Column(db.String(10))

    # Delivery
    delivery_date = db.Column(db.Date)
    delivery_time = db.Column(db.String(20))

    # Gift
    is_gift = db.Column(db.Boolean, default=False)
    occasion_type = db.Column(db.String(50))
    gift_message = db.Column(db.String(500))
    recipient_name = db.Column(db.String(100))
    recipient_phone = db.Column(db.String(20))

    special_instructions = db.Column(db.Text)

    # Pricing
    subtotal = db.Column(db.Float, default=0.0)
    delivery_fee = db.Column(db.Float, default=0.0)
    packaging_fee = db.Column(db.Float, default=0.0)
    tax = db.Column(db.Float, default=0.0)
    discount = db.Column(db.Float, default=0.0)
    total = db.Column(db.Float, nullable=False, default=0.0)

    # Payment
    payment_method = db.Column(db.String(20), default='cod')
    payment_status = db.Column(db.String(20), default='pending')
    transaction_id = db.Column(db.String(100))

    # Status
    status = db.Column(db.String(50), default='pending', index=True)
    admin_notes = db.Column(db.Text)
    cancel_reason = db.Column(db.String(500))
    source = db.Column(db.String(20), default='website')

    # Timestamps
    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    confirmed_at = db.Column(db.DateTime)
    delivered_at = db.Column(db.DateTime)

    # Relationships
    items = db.relationship('OrderItem', backref='order', lazy='dynamic', cascade='all, delete-orphan')
    status_history = db.relationship('OrderStatusHistory', backref='order', lazy='dynamic',
                                     cascade='all, delete-orphan')
    feedback = db.relationship('Feedback', backref='order', uselist=False, cascade='all, delete-orphan')

    @staticmethod
    def generate_order_ref():
        """Generate a unique order reference."""
        timestamp = datetime.utcnow().strftime('%Y%m%d%H%M')
        unique_id = str(uuid.uuid4().hex)[:6].upper()
        return f'NSB{timestamp}{unique_id}'

    def add_status_history(self, status, notes=None):
        """Add a status change to history."""
        history = OrderStatusHistory(status=status, notes=notes)
        self.status_history.append(history)
        return history

    def can_cancel(self):
        """Check if order can be cancelled."""
        return (self.status or 'pending') in ['pending', 'confirmed']

    @property
    def tracking_steps(self):
        """Ordered (step, done) pairs for the tracking bar."""
        status = self.status or 'pending'
        if status == 'cancelled':
            return [(step, step == 'placed') for step, _ in TRACKING_STEPS]
        reached = [s for _, s in TRACKING_STEPS].index(status) if status in ORDER_STATUSES else 0
        return [(step, index <= reached) for index, (step, _) in enumerate(TRACKING_STEPS)]

    @property
    def delivery_slot_label(self):
        return DELIVERY_SLOTS.get(self.delivery_time, self.delivery_time or '')

    @property
    def item_names(self):
        return ', '.join(item.cake_name for item in self.items)

    def __repr__(self):
        return f'<Order {self.order_ref}>'


class OrderItem(db.Model):
    """Order line; product fields are snapshots taken at checkout."""
    __tablename__ = 'order_items'

    id = db.Column(db.Integer, primary_key=True)
    order_id = db.Column(db.Integer, db.ForeignKey('orders.id'), nullable=False)
    product_id = db.Column(db.Integer, db.ForeignKey('products.id', ondelete='SET NULL'))
    cake_name = db.Column(db.String(150), nullable=False)
    cake_image = db.Column(db.String(255))
    weight = db.Column(db.String(50))
    flavor = db.Column(db.String(100))
    quantity = db.Column(db.Integer, nullable=False)
    base_price = db.Column(db.Float, nullable=False)
    total_price = db.Column(db.Float, nullable=False)
    customization = db.Column(db.String(500))

    def __repr__(self):
        return f'<OrderItem {self.cake_name} x {self.quantity}>'


class OrderStatusHistory(db.Model):
    """Order status history model."""
    __tablename__ = 'order_status_history'

    id = db.Column(db.Integer, primary_key=True)
    order_id = db.Column(db.Integer, db.ForeignKey('orders.id'), nullable=False)
    status = db.Column(db.String(50), nullable=False)
    notes = db.Column(db.String(500))
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f'<OrderStatusHistory {self.status}>'


class Feedback(db.Model):
    """Post-delivery feedback, one per order."""
    __tablename__ = 'feedback'

    id = db.Column(db.Integer, primary_key=True)
    order_id = db.Column(db.Integer, db.ForeignKey('orders.id'), unique=True, nullable=False)
    rating = db.Column(db.Integer, nullable=False)
    comment = db.Column(db.Text)
    would_recommend = db.Column(db.Boolean, default=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f'<Feedback {self.order_id} {self.rating}>'
