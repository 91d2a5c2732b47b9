"""One form per custom cake wizard step."""

from flask import current_app
from flask_wtf import FlaskForm
from flask_wtf.file import MultipleFileField
from wtforms import StringField, TextAreaField, BooleanField, SelectField, DateField
from wtforms.validators import DataRequired, Email, Length, Optional, ValidationError
from .orders import OCCASIONS
from .validators import ten_digit_phone, not_in_past, MinimumNotice

SIZES = [
    ('', 'Select size'),
    ('0.5kg', '0.5 kg'),
    ('1kg', '1 kg'),
    ('1.5kg', '1.5 kg'),
    ('2kg', '2 kg'),
    ('3kg', '3 kg'),
    ('5kg+', '5 kg or more'),
]

TIERS = [('1', 'Single tier'), ('2', 'Two tiers'), ('3', 'Three tiers')]

URGENCY = [('normal', 'Normal'), ('urgent', 'Urgent')]


class ContactStepForm(FlaskForm):
    name = StringField('Your Name', validators=[
        DataRequired(message='Name is required'),
        Length(max=100)
    ])
    phone = StringField('Phone Number', validators=[
        DataRequired(message='Phone number is required'),
        ten_digit_phone
    ])
    email = StringField('Email', validators=[
        Optional(),
        Email(message='Please enter a valid email address')
    ])


class CakeStepForm(FlaskForm):
    occasion = SelectField('Occasion', choices=OCCASIONS, validators=[
        DataRequired(message='Please choose an occasion')
    ])
    flavor = StringField('Flavor', validators=[
        DataRequired(message='Flavor is required'),
        Length(max=100)
    ])
    size = SelectField('Size', choices=SIZES, validators=[
        DataRequired(message='Please choose a size')
    ])
    servings = StringField('Servings', validators=[Optional(), Length(max=20)])
    tier = SelectField('Tiers', choices=TIERS, default='1', validators=[Optional()])
    eggless = BooleanField('Eggless')


class DesignStepForm(FlaskForm):
    design = TextAreaField('Design Description', validators=[
        DataRequired(message='Please describe the design'),
        Length(max=3000)
    ])
    reference_images = MultipleFileField('Reference Images')
    message = TextAreaField('Message on Cake / Notes', validators=[Optional(), Length(max=500)])

    def validate_reference_images(self, field):
        files = [f for f in (field.data or []) if getattr(f, 'filename', '')]
        limit = current_app.config['MAX_REFERENCE_IMAGES']
        if len(files) > limit:
            raise ValidationError(f'You can upload at most {limit} images')


class DeliveryStepForm(FlaskForm):
    delivery_date = DateField('Delivery Date', validators=[
        DataRequired(message='Delivery date is required'),
        not_in_past
    ])
    delivery_address = TextAreaField('Delivery Address', validators=[Optional(), Length(max=500)])
    budget = StringField('Budget', validators=[
        DataRequired(message='Budget is required'),
        Length(max=50)
    ])
    urgency = SelectField('Urgency', choices=URGENCY, default='normal')

    def validate_delivery_date(self, field):
        MinimumNotice(current_app.config['CUSTOM_CAKE_MIN_NOTICE_DAYS'])(self, field)
