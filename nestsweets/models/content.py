"""Editable page content."""

from datetime import datetime
from nestsweets.extensions import db

LIST_SECTIONS = ['hero_slides', 'features', 'why_choose', 'services']
POLICY_TYPES = {
    'privacy': 'Privacy Policy',
    'terms': 'Terms of Service',
    'refund': 'Refund Policy',
    'cookie': 'Cookie Policy',
}


class ContentBlock(db.Model):
    """An ordered block of a content section (hero slide, feature, policy...)."""
    __tablename__ = 'content_blocks'

    id = db.Column(db.Integer, primary_key=True)
    section = db.Column(db.String(50), nullable=False, index=True)
    position = db.Column(db.Integer, default=0)
    data = db.Column(db.JSON, default=dict)
    is_active = db.Column(db.Boolean, default=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    @classmethod
    def section_items(cls, section, active_only=False):
        query = cls.query.filter_by(section=section)
        if active_only:
            query = query.filter_by(is_active=True)
        return query.order_by(cls.position.asc(), cls.id.asc()).all()

    @classmethod
    def replace_section(cls, section, items):
        """Replace every block of a section with items, in order.

        Runs inside the caller's transaction; nothing is committed here.
        """
        cls.query.filter_by(section=section).delete()
        blocks = []
        for position, item in enumerate(items):
            item = dict(item)
            is_active = bool(item.pop('is_active', True))
            block = cls(section=section, position=position, data=item, is_active=is_active)
            db.session.add(block)
            blocks.append(block)
        return blocks

    @classmethod
    def get_policy(cls, policy_type):
        for block in cls.section_items('policies'):
            if (block.data or {}).get('type') == policy_type:
                return block
        return None

    @classmethod
    def upsert_policy(cls, policy_type, title, content):
        """Create or update the policy of this type, stamping last_updated."""
        block = cls.get_policy(policy_type)
        data = {
            'type': policy_type,
            'title': title or POLICY_TYPES.get(policy_type, policy_type.title()),
            'content': content or '',
            'last_updated': datetime.utcnow().strftime('%Y-%m-%d'),
        }
        if block is None:
            position = len(cls.section_items('policies'))
            block = cls(section='policies', position=position, data=data)
            db.session.add(block)
        else:
            block.data = data
        return block

    def __repr__(self):
        return f'<ContentBlock {self.section}#{self.position}>'
