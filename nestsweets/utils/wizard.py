"""Session state for the multi-step custom cake request."""

from datetime import date
from flask import session

SESSION_KEY = 'custom_cake_wizard'

STEPS = ['contact', 'cake', 'design', 'delivery']


class CakeWizard:
    """Holds the current step and the answers collected so far."""

    def __init__(self, step=1, data=None):
        self.step = step
        self.data = data or {}

    @classmethod
    def load(cls):
        state = session.get(SESSION_KEY) or {}
        step = state.get('step', 1)
        if step not in range(1, len(STEPS) + 1):
            step = 1
        return cls(step, dict(state.get('data') or {}))

    def save(self):
        session[SESSION_KEY] = {'step': self.step, 'data': self.data}
        session.modified = True

    @staticmethod
    def reset():
        session.pop(SESSION_KEY, None)

    @property
    def name(self):
        return STEPS[self.step - 1]

    @property
    def is_last(self):
        return self.step == len(STEPS)

    def store(self, values):
        for key, value in values.items():
            if isinstance(value, date):
                value = value.isoformat()
            self.data[key] = value

    def next(self):
        if not self.is_last:
            self.step += 1
        self.save()

    def back(self):
        """Going back never validates."""
        if self.step > 1:
            self.step -= 1
        self.save()

    def form_data(self):
        """Stored answers with dates revived, for pre-filling step forms."""
        data = dict(self.data)
        if data.get('delivery_date'):
            data['delivery_date'] = date.fromisoformat(data['delivery_date'])
        return data
