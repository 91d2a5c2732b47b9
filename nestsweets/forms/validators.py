"""Shared field validators."""

import re
from datetime import date, timedelta
from wtforms.validators import ValidationError

PHONE_DIGITS = 10


def ten_digit_phone(form, field):
    """Accept formatting characters but require exactly 10 digits (after any +91)."""
    digits = re.sub(r'\D', '', field.data or '')
    if len(digits) == 12 and digits.startswith('91'):
        digits = digits[2:]
    if len(digits) != PHONE_DIGITS:
        raise ValidationError('Please enter a valid 10-digit phone number')


def not_in_past(form, field):
    if field.data and field.data < date.today():
        raise ValidationError('Delivery date cannot be in the past')


class MinimumNotice:
    """Date must be at least `days` days from today."""

    def __init__(self, days, message=None):
        self.days = days
        self.message = message

    def __call__(self, form, field):
        if field.data and field.data < date.today() + timedelta(days=self.days):
            raise ValidationError(
                self.message or f'Please allow at least {self.days} days notice'
            )
