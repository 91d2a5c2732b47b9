"""Custom cake request model."""

from datetime import datetime
import uuid
from nestsweets.extensions import db

REQUEST_STATUSES = ['pending', 'contacted', 'approved', 'processing', 'completed', 'rejected']


class CustomRequest(db.Model):
    """A bespoke cake request awaiting admin review."""
    __tablename__ = 'custom_requests'

    id = db.Column(db.Integer, primary_key=True)
    request_ref = db.Column(db.String(50), unique=True, nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), index=True)

    # Contact
    name = db.Column(db.String(100), nullable=False)
    phone = db.Column(db.String(20), nullable=False)
    email = db.Column(db.String(120))

    # Cake
    occasion = db.Column(db.String(50), nullable=False)
    flavor = db.Column(db.String(100), nullable=False)
    size = db.Column(db.String(50), nullable=False)
    servings = db.Column(db.String(20))
    tier = db.Column(db.String(20))
    eggless = db.Column(db.Boolean, default=False)

    # Design
    design = db.Column(db.Text, nullable=False)
    reference_images = db.Column(db.JSON, default=list)
    message = db.Column(db.Text)

    # Delivery
    delivery_date = db.Column(db.Date, nullable=False)
    delivery_address = db.Column(db.String(500))
    budget = db.Column(db.String(50), nullable=False)
    urgency = db.Column(db.String(20), default='normal')

    # Admin
    status = db.Column(db.String(20), default='pending', index=True)
    admin_notes = db.Column(db.Text)
    quoted_price = db.Column(db.Float)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    @staticmethod
    def generate_request_ref():
        timestamp = datetime.utcnow().strftime('%Y%m%d')
        return f'CR{timestamp}{uuid.uuid4().hex[:6].upper()}'

    @property
    def is_urgent(self):
        return self.urgency == 'urgent'

    def __repr__(self):
        return f'<CustomRequest {self.request_ref}>'
