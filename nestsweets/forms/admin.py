"""Back-office forms."""

from flask_wtf import FlaskForm
from flask_wtf.file import FileField, FileAllowed
from wtforms import (StringField, TextAreaField, BooleanField, SelectField,
                     FloatField, IntegerField)
from wtforms.validators import DataRequired, Email, Length, Optional, NumberRange
from nestsweets.models.order import ORDER_STATUSES, PAYMENT_STATUSES
from nestsweets.models.custom_request import REQUEST_STATUSES

IMAGE_TYPES = ['png', 'jpg', 'jpeg', 'gif', 'webp']


def _label(value):
    return value.replace('_', ' ').title()


def parse_weights(text, base_price):
    """Parse one 'weight | price | servings' option per line."""
    options = []
    for line in (text or '').splitlines():
        parts = [p.strip() for p in line.split('|')]
        if not parts or not parts[0]:
            continue
        try:
            price = float(parts[1]) if len(parts) > 1 and parts[1] else float(base_price)
        except ValueError:
            price = float(base_price)
        option = {'weight': parts[0], 'price': price}
        if len(parts) > 2 and parts[2]:
            option['servings'] = parts[2]
        options.append(option)
    return options


def format_weights(weights):
    lines = []
    for option in weights or []:
        parts = [option.get('weight', ''), f"{float(option.get('price') or 0):g}"]
        if option.get('servings'):
            parts.append(option['servings'])
        lines.append(' | '.join(parts))
    return '\n'.join(lines)


def parse_list(text):
    return [item.strip() for item in (text or '').split(',') if item.strip()]


class ProductForm(FlaskForm):
    """Cake create/edit form."""
    name = StringField('Cake Name', validators=[DataRequired(), Length(max=150)])
    description = TextAreaField('Description', validators=[Optional(), Length(max=5000)])
    category = StringField('Category', validators=[DataRequired(), Length(max=100)])
    base_price = FloatField('Base Price', validators=[DataRequired(), NumberRange(min=0)])
    weights = TextAreaField('Weight Options (weight | price | servings, one per line)',
                            validators=[Optional()])
    flavors = StringField('Flavors (comma separated)', validators=[Optional()])
    eggless = BooleanField('Eggless')
    image_url = StringField('Image URL', validators=[Optional(), Length(max=255)])
    image = FileField('Upload Image', validators=[FileAllowed(IMAGE_TYPES, 'Images only!')])
    stock = IntegerField('Stock (leave empty for unlimited)', validators=[
        Optional(), NumberRange(min=0)
    ])
    in_stock = BooleanField('In Stock', default=True)
    is_featured = BooleanField('Featured')
    is_popular = BooleanField('Popular')
    is_bestseller = BooleanField('Bestseller')
    advance_booking_days = IntegerField('Advance Booking Days', default=0,
                                        validators=[Optional(), NumberRange(min=0)])


class OrderStatusForm(FlaskForm):
    status = SelectField('Status', choices=[(s, _label(s)) for s in ORDER_STATUSES])
    notes = StringField('Notes', validators=[Optional(), Length(max=500)])


class PaymentStatusForm(FlaskForm):
    payment_status = SelectField('Payment Status', choices=[(s, _label(s)) for s in PAYMENT_STATUSES])
    transaction_id = StringField('Transaction ID', validators=[Optional(), Length(max=100)])


class CustomRequestStatusForm(FlaskForm):
    status = SelectField('Status', choices=[(s, _label(s)) for s in REQUEST_STATUSES])
    admin_notes = TextAreaField('Admin Notes', validators=[Optional(), Length(max=2000)])
    quoted_price = FloatField('Quoted Price', validators=[Optional(), NumberRange(min=0)])


class TestimonialForm(FlaskForm):
    customer_name = StringField('Customer Name', validators=[DataRequired(), Length(max=100)])
    customer_image = StringField('Image URL', validators=[Optional(), Length(max=255)])
    image = FileField('Upload Image', validators=[FileAllowed(IMAGE_TYPES, 'Images only!')])
    rating = IntegerField('Rating', default=5, validators=[DataRequired(), NumberRange(min=1, max=5)])
    comment = TextAreaField('Comment', validators=[DataRequired(), Length(max=2000)])
    cake_name = StringField('Cake', validators=[Optional(), Length(max=150)])
    approved = BooleanField('Approved', default=True)
    featured = BooleanField('Featured')


class ReviewForm(FlaskForm):
    product_id = SelectField('Cake', coerce=int, validators=[DataRequired()])
    customer_name = StringField('Customer Name', validators=[DataRequired(), Length(max=100)])
    rating = IntegerField('Rating', default=5, validators=[DataRequired(), NumberRange(min=1, max=5)])
    comment = TextAreaField('Comment', validators=[Optional(), Length(max=2000)])


class AnnouncementForm(FlaskForm):
    title = StringField('Title', validators=[DataRequired(), Length(max=200)])
    message = TextAreaField('Message', validators=[DataRequired(), Length(max=2000)])
    type = SelectField('Type', choices=[('info', 'Info'), ('promo', 'Promo'), ('system', 'System')])
    link = StringField('Link', validators=[Optional(), Length(max=255)])
    is_active = BooleanField('Active', default=True)
    show_on_header = BooleanField('Show in header')
    broadcast = BooleanField('Send as notification to all users', default=True)


class SettingsForm(FlaskForm):
    """Every field of the site settings record."""
    business_name = StringField('Business Name', validators=[DataRequired(), Length(max=100)])
    city_name = StringField('City', validators=[Optional(), Length(max=100)])
    address = StringField('Address', validators=[Optional(), Length(max=300)])
    phone = StringField('Phone', validators=[Optional(), Length(max=20)])
    whatsapp = StringField('WhatsApp', validators=[Optional(), Length(max=20)])
    support_phone = StringField('Support Phone', validators=[Optional(), Length(max=20)])
    email = StringField('Email', validators=[Optional(), Email()])
    support_email = StringField('Support Email', validators=[Optional(), Email()])
    allowed_pincodes = StringField('Allowed Pincodes (comma separated, blank for all)',
                                   validators=[Optional()])
    delivery_fee = FloatField('Delivery Fee', validators=[Optional(), NumberRange(min=0)])
    free_delivery_above = FloatField('Free Delivery Above', validators=[Optional(), NumberRange(min=0)])
    minimum_order = FloatField('Minimum Order', validators=[Optional(), NumberRange(min=0)])
    delivery_info = StringField('Delivery Info', validators=[Optional(), Length(max=200)])
    tax_rate = FloatField('Tax Rate (%)', validators=[Optional(), NumberRange(min=0, max=100)])
    currency = SelectField('Currency', choices=[('INR', 'INR (₹)'), ('CAD', 'CAD ($)')])
    business_hours = StringField('Business Hours', validators=[Optional(), Length(max=100)])
    instagram = StringField('Instagram', validators=[Optional(), Length(max=255)])
    facebook = StringField('Facebook', validators=[Optional(), Length(max=255)])
    twitter = StringField('Twitter', validators=[Optional(), Length(max=255)])
    youtube = StringField('YouTube', validators=[Optional(), Length(max=255)])
    enable_online_orders = BooleanField('Enable online orders')
    enable_whatsapp_orders = BooleanField('Enable WhatsApp orders')
    enable_cash_on_delivery = BooleanField('Enable cash on delivery')
    enable_online_payment = BooleanField('Enable online payment')

    SOCIAL_FIELDS = ('instagram', 'facebook', 'twitter', 'youtube')

    def load(self, settings):
        for name, field in self._fields.items():
            if name in self.SOCIAL_FIELDS:
                field.data = (settings.get('social_media') or {}).get(name, '')
            elif name in settings:
                field.data = settings[name]

    def values(self):
        """Settings record built from the submitted fields.

        Blank numeric fields are left out so the stored value is kept.
        """
        values = {}
        for name, field in self._fields.items():
            if name == 'csrf_token' or name in self.SOCIAL_FIELDS or field.data is None:
                continue
            values[name] = field.data
        values['social_media'] = {
            name: self._fields[name].data for name in self.SOCIAL_FIELDS if self._fields[name].data
        }
        return values
