"""Checkout and feedback forms."""

from flask_wtf import FlaskForm
from wtforms import (StringField, TextAreaField, BooleanField, SelectField,
                     DateField, RadioField, IntegerField)
from wtforms.validators import DataRequired, Email, Length, Optional, NumberRange
from nestsweets.models.order import DELIVERY_SLOTS
from .validators import ten_digit_phone, not_in_past

OCCASIONS = [
    ('', 'Select occasion'),
    ('birthday', 'Birthday'),
    ('anniversary', 'Anniversary'),
    ('wedding', 'Wedding'),
    ('baby_shower', 'Baby Shower'),
    ('graduation', 'Graduation'),
    ('other', 'Other'),
]


class CheckoutForm(FlaskForm):
    """Delivery details and payment choice."""
    customer_name = StringField('Full Name', validators=[
        DataRequired(message='Name is required'),
        Length(max=100)
    ])
    customer_phone = StringField('Phone Number', validators=[
        DataRequired(message='Phone number is required'),
        ten_digit_phone
    ])
    customer_email = StringField('Email', validators=[
        Optional(),
        Email(message='Please enter a valid email address')
    ])
    delivery_address = TextAreaField('Delivery Address', validators=[
        DataRequired(message='Address is required'),
        Length(max=500)
    ])
    delivery_pincode = StringField('Pincode', validators=[
        DataRequired(message='Pincode is required'),
        Length(min=6, max=6, message='Pincode must be 6 digits')
    ])
    delivery_date = DateField('Delivery Date', validators=[
        DataRequired(message='Delivery date is required'),
        not_in_past
    ])
    delivery_time = SelectField('Delivery Time', choices=list(DELIVERY_SLOTS.items()),
                                validators=[DataRequired()])

    is_gift = BooleanField('This is a gift')
    occasion_type = SelectField('Occasion', choices=OCCASIONS, validators=[Optional()])
    gift_message = TextAreaField('Gift Message', validators=[Optional(), Length(max=500)])
    recipient_name = StringField('Recipient Name', validators=[Optional(), Length(max=100)])
    recipient_phone = StringField('Recipient Phone', validators=[Optional(), Length(max=20)])

    special_instructions = TextAreaField('Special Instructions', validators=[
        Optional(),
        Length(max=1000)
    ])
    payment_method = RadioField('Payment Method', choices=[
        ('cod', 'Cash on Delivery'),
        ('online', 'Online Payment'),
    ], default='cod', validators=[DataRequired()])

    def limit_payment_methods(self, settings):
        """Offer only the payment methods enabled in settings."""
        choices = []
        if settings.get('enable_cash_on_delivery', True):
            choices.append(('cod', 'Cash on Delivery'))
        if settings.get('enable_online_payment', True):
            choices.append(('online', 'Online Payment'))
        self.payment_method.choices = choices
        if choices and self.payment_method.data not in [value for value, _ in choices]:
            self.payment_method.data = choices[0][0]


class FeedbackForm(FlaskForm):
    rating = IntegerField('Rating', validators=[
        DataRequired(message='Please choose a rating'),
        NumberRange(min=1, max=5)
    ])
    comment = TextAreaField('Comment', validators=[Optional(), Length(max=2000)])
    would_recommend = BooleanField('I would recommend NestSweets', default=True)


class CancelOrderForm(FlaskForm):
    reason = StringField('Reason', validators=[Optional(), Length(max=500)])
