"""Database models package."""

from .user import User
from .product import Product
from .order import Order, OrderItem, OrderStatusHistory, Feedback
from .review import Review, Testimonial
from .custom_request import CustomRequest
from .announcement import Announcement
from .notification import Notification, AdminNotification
from .wishlist import Wishlist
from .contact import ContactMessage
from .content import ContentBlock
from .settings import SiteSetting

__all__ = [
    'User',
    'Product',
    'Order',
    'OrderItem',
    'OrderStatusHistory',
    'Feedback',
    'Review',
    'Testimonial',
    'CustomRequest',
    'Announcement',
    'Notification',
    'AdminNotification',
    'Wishlist',
    'ContactMessage',
    'ContentBlock',
    'SiteSetting',
]
