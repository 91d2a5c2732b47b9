"""Site settings stored as keyed JSON records."""

import copy
import logging
from datetime import datetime
from sqlalchemy.exc import SQLAlchemyError
from nestsweets.extensions import db

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS = {
    'business_name': 'Nest Sweet Bakers',
    'city_name': 'Narnaund',
    'address': 'Narnaund, Haryana, India',
    'phone': '+91 98765 43210',
    'whatsapp': '+91 98765 43210',
    'support_phone': '+91 98765 43210',
    'email': 'info@nestsweetbakers.com',
    'support_email': 'support@nestsweetbakers.com',
    'allowed_pincodes': '',
    'delivery_fee': 50,
    'free_delivery_above': 500,
    'minimum_order': 500,
    'delivery_info': 'Same-day delivery available',
    'tax_rate': 0,
    'currency': 'INR',
    'business_hours': 'Mon-Sun: 9 AM - 9 PM',
    'social_media': {},
    'enable_online_orders': True,
    'enable_whatsapp_orders': True,
    'enable_cash_on_delivery': True,
    'enable_online_payment': True,
}

DEFAULT_STATS = {'orders': 0, 'customers': 0, 'cakes': 0, 'rating': 0}

DEFAULT_FOOTER = {
    'company_name': 'NestSweets',
    'tagline': '',
    'phone': '',
    'email': '',
    'address': '',
    'social': {},
    'newsletter': {'enabled': True, 'title': '', 'subtitle': ''},
}

DEFAULT_ABOUT_PAGE = {
    'hero_title': 'About NestSweets',
    'hero_subtitle': 'Crafting Sweet Memories Since 2020',
    'hero_image': '',
    'story_title': 'Our Story',
    'story_paragraphs': [
        'Welcome to NestSweets, where every cake tells a story and every bite creates a memory.',
        'What began as a small home bakery has blossomed into a beloved local favorite.',
        'Today, we are proud to serve customers for birthdays, weddings, anniversaries, and more.',
    ],
    'mission_title': 'Our Mission',
    'mission_text': 'To bring joy to every celebration with handcrafted, delicious cakes made with love.',
    'vision_title': 'Our Vision',
    'vision_text': 'To become the most trusted and creative cake brand in our region and beyond.',
}

DEFAULT_SERVICES_PAGE = {
    'hero_title': 'Our Services',
    'hero_subtitle': 'Premium cake services for every celebration',
    'hero_image': '',
    'intro_title': 'What We Offer',
    'intro_subtitle': 'From custom designs to delivery, we provide comprehensive cake services for all your needs.',
    'cta_primary_label': 'Order Custom Cake',
    'cta_primary_link': '/custom-cake',
    'cta_secondary_label': 'Contact Us',
    'cta_secondary_link': '/contact',
}

DEFAULTS = {
    'site': DEFAULT_SETTINGS,
    'stats': DEFAULT_STATS,
    'footer': DEFAULT_FOOTER,
    'about_page': DEFAULT_ABOUT_PAGE,
    'services_page': DEFAULT_SERVICES_PAGE,
}


class SiteSetting(db.Model):
    """One JSON settings record per key."""
    __tablename__ = 'site_settings'

    id = db.Column(db.Integer, primary_key=True)
    key = db.Column(db.String(50), unique=True, nullable=False)
    data = db.Column(db.JSON, default=dict)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f'<SiteSetting {self.key}>'


def load_record(key):
    """Stored record merged over its defaults. Read errors yield defaults."""
    values = copy.deepcopy(DEFAULTS.get(key, {}))
    try:
        record = SiteSetting.query.filter_by(key=key).first()
    except SQLAlchemyError:
        logger.exception('Failed to load settings record %s', key)
        db.session.rollback()
        return values
    if record and record.data:
        values.update(record.data)
    return values


def save_record(key, values, commit=True):
    """Merge values into the stored record and persist it."""
    record = SiteSetting.query.filter_by(key=key).first()
    if record is None:
        record = SiteSetting(key=key, data={})
        db.session.add(record)
    merged = dict(record.data or {})
    merged.update(values)
    record.data = merged
    if commit:
        db.session.commit()
    return record


def load_site_settings():
    return load_record('site')


def save_site_settings(values):
    unknown = set(values) - set(DEFAULT_SETTINGS)
    if unknown:
        logger.warning('Ignoring unknown settings: %s', ', '.join(sorted(unknown)))
    known = {k: v for k, v in values.items() if k in DEFAULT_SETTINGS}
    save_record('site', known)
    return load_site_settings()
