"""Session-backed shopping cart, usable by guests."""

from flask import session
from nestsweets.extensions import db
from nestsweets.models import Product

SESSION_KEY = 'cart'


class CartLine:
    """A cart line resolved against its product."""

    def __init__(self, key, product, data):
        self.key = key
        self.product = product
        self.weight = data.get('weight') or ''
        self.flavor = data.get('flavor') or ''
        self.customization = data.get('customization') or ''
        self.quantity = int(data.get('quantity') or 0)
        self.price = float(data.get('price') or 0)

    @property
    def subtotal(self):
        return self.price * self.quantity

    @property
    def name(self):
        return self.product.name

    @property
    def image(self):
        return self.product.thumbnail


def line_key(product_id, weight='', flavor='', customization=''):
    """Lines are identical when product, weight, flavor and customization match."""
    return '|'.join([str(product_id), weight or '', flavor or '', (customization or '').strip()])


class Cart:
    """Wraps the list of cart lines kept in the Flask session."""

    def __init__(self, lines):
        self._lines = lines

    @classmethod
    def from_session(cls):
        return cls(list(session.get(SESSION_KEY, [])))

    def save(self):
        session[SESSION_KEY] = self._lines
        session.modified = True

    def _find(self, key):
        for line in self._lines:
            if line['key'] == key:
                return line
        return None

    def add(self, product, quantity=1, weight='', flavor='', customization=''):
        """Add a product; identical lines are merged by quantity."""
        quantity = max(1, int(quantity or 1))
        key = line_key(product.id, weight, flavor, customization)
        line = self._find(key)
        if line:
            line['quantity'] += quantity
        else:
            self._lines.append({
                'key': key,
                'product_id': product.id,
                'weight': weight or '',
                'flavor': flavor or '',
                'customization': (customization or '').strip(),
                'quantity': quantity,
                'price': product.price_for(weight),
            })
        self.save()
        return key

    def update(self, key, quantity):
        """Set a line's quantity; zero or less removes it."""
        line = self._find(key)
        if line is None:
            return False
        if quantity <= 0:
            self._lines.remove(line)
        else:
            line['quantity'] = int(quantity)
        self.save()
        return True

    def remove(self, key):
        return self.update(key, 0)

    def clear(self):
        self._lines = []
        self.save()

    def items(self):
        """Resolved lines; lines whose product no longer exists are dropped."""
        resolved = []
        stale = []
        for data in self._lines:
            product = db.session.get(Product, data['product_id'])
            if product is None:
                stale.append(data)
                continue
            resolved.append(CartLine(data['key'], product, data))
        if stale:
            self._lines = [line for line in self._lines if line not in stale]
            self.save()
        return resolved

    @property
    def count(self):
        return sum(int(line.get('quantity') or 0) for line in self._lines)

    @property
    def total(self):
        return sum(line.subtotal for line in self.items())

    def __len__(self):
        return len(self._lines)

    def __bool__(self):
        return bool(self._lines)
