"""Seed script to populate the database with a sample catalog and accounts."""

from nestsweets import create_app
from nestsweets.extensions import db
from nestsweets.models import User, Product, Testimonial, Announcement, ContentBlock
from nestsweets.models.content import POLICY_TYPES
from nestsweets.models.settings import save_record

CAKES = [
    {'name': 'Chocolate Truffle', 'category': 'Chocolate', 'base_price': 650,
     'description': 'Layers of dark chocolate sponge and silky truffle ganache.',
     'weights': [{'weight': '0.5 kg', 'price': 650, 'servings': '4-6'},
                 {'weight': '1 kg', 'price': 1200, 'servings': '8-10'}],
     'flavors': ['Dark Chocolate', 'Milk Chocolate'], 'is_bestseller': True, 'is_featured': True, 'stock': 25},
    {'name': 'Red Velvet', 'category': 'Classic', 'base_price': 750,
     'description': 'Velvety cocoa sponge with cream cheese frosting.',
     'weights': [{'weight': '0.5 kg', 'price': 750, 'servings': '4-6'},
                 {'weight': '1 kg', 'price': 1400, 'servings': '8-10'}],
     'flavors': ['Classic'], 'is_popular': True, 'is_featured': True},
    {'name': 'Black Forest', 'category': 'Classic', 'base_price': 550,
     'description': 'Chocolate sponge, whipped cream and cherries.',
     'weights': [{'weight': '0.5 kg', 'price': 550, 'servings': '4-6'},
                 {'weight': '1 kg', 'price': 1000, 'servings': '8-10'}],
     'flavors': ['Classic'], 'eggless': True, 'is_bestseller': True},
    {'name': 'Pineapple Delight', 'category': 'Fruit', 'base_price': 500,
     'description': 'Light vanilla sponge with fresh pineapple and cream.',
     'weights': [{'weight': '0.5 kg', 'price': 500, 'servings': '4-6'},
                 {'weight': '1 kg', 'price': 900, 'servings': '8-10'}],
     'flavors': ['Pineapple'], 'eggless': True, 'stock': 15},
    {'name': 'Butterscotch Crunch', 'category': 'Classic', 'base_price': 600,
     'description': 'Butterscotch cream with caramel praline crunch.',
     'weights': [{'weight': '1 kg', 'price': 1100, 'servings': '8-10'}],
     'flavors': ['Butterscotch'], 'is_popular': True},
    {'name': 'Two Tier Wedding Cake', 'category': 'Wedding', 'base_price': 4500,
     'description': 'Elegant two tier cake finished with fondant flowers.',
     'weights': [{'weight': '3 kg', 'price': 4500, 'servings': '30-35'},
                 {'weight': '5 kg', 'price': 7000, 'servings': '50-60'}],
     'flavors': ['Vanilla', 'Chocolate', 'Red Velvet'], 'advance_booking_days': 3},
]

CONTENT = {
    'hero_slides': [
        {'title': 'Freshly Baked Happiness', 'subtitle': 'Cakes for every celebration',
         'description': 'Handcrafted cakes delivered to your door.', 'image': '',
         'cta_text': 'Browse Cakes', 'cta_link': '/cakes'},
        {'title': 'Design Your Dream Cake', 'subtitle': 'Custom cakes made to order',
         'description': 'Tell us your idea and we will bake it.', 'image': '',
         'cta_text': 'Start Designing', 'cta_link': '/custom-cake'},
    ],
    'features': [
        {'icon': 'bi-truck', 'title': 'Same-day Delivery', 'description': 'Order before noon for delivery today.'},
        {'icon': 'bi-egg', 'title': 'Eggless Options', 'description': 'Most cakes are available eggless.'},
        {'icon': 'bi-brush', 'title': 'Custom Designs', 'description': 'Photo cakes, tiers and themes.'},
    ],
    'why_choose': [
        {'icon': 'bi-heart', 'title': 'Baked with Love', 'description': 'Small batches, fresh every morning.'},
        {'icon': 'bi-award', 'title': 'Quality Ingredients', 'description': 'Real butter, real chocolate.'},
    ],
    'services': [
        {'icon': 'bi-cake2', 'title': 'Birthday Cakes', 'description': 'Themed cakes for all ages.',
         'features': ['Photo cakes', 'Theme toppers'], 'image': '', 'color': 'pink'},
        {'icon': 'bi-gem', 'title': 'Wedding Cakes', 'description': 'Tiered showpieces for your big day.',
         'features': ['Tasting session', 'Multi-tier'], 'image': '', 'color': 'purple'},
    ],
}

TESTIMONIALS = [
    {'customer_name': 'Ananya', 'rating': 5, 'cake_name': 'Chocolate Truffle',
     'comment': 'The best chocolate cake in town. Delivered right on time!', 'featured': True},
    {'customer_name': 'Rohit', 'rating': 5, 'cake_name': 'Two Tier Wedding Cake',
     'comment': 'Our wedding cake looked stunning and tasted even better.', 'featured': True},
    {'customer_name': 'Meera', 'rating': 4, 'cake_name': 'Red Velvet',
     'comment': 'Lovely frosting, not too sweet.'},
]


def seed_database():
    """Seed the database with sample data."""
    app = create_app()

    with app.app_context():
        db.create_all()

        if User.query.filter_by(email='admin@nestsweets.com').first():
            print('Database already seeded!')
            return

        print('Seeding database...')

        accounts = [
            ('superadmin@nestsweets.com', 'Super Admin', 'superadmin', 'super123'),
            ('admin@nestsweets.com', 'Admin User', 'admin', 'admin123'),
            ('customer@example.com', 'Sample Customer', 'customer', 'user123'),
        ]
        for email, name, role, password in accounts:
            user = User(email=email, name=name, phone='9876543210', role=role)
            user.set_password(password)
            db.session.add(user)

        for data in CAKES:
            product = Product(**data)
            product.generate_slug()
            db.session.add(product)
            db.session.flush()

        for section, items in CONTENT.items():
            ContentBlock.replace_section(section, items)
        for policy_type, title in POLICY_TYPES.items():
            ContentBlock.upsert_policy(policy_type, title, f'{title} for NestSweets.')

        for data in TESTIMONIALS:
            db.session.add(Testimonial(**data))

        db.session.add(Announcement(
            title='Festive Season Orders Open',
            message='Pre-book your festive cakes now for guaranteed delivery.',
            type='promo',
            show_on_header=True
        ))

        save_record('stats', {'orders': 1200, 'customers': 900, 'cakes': len(CAKES), 'rating': 4.8},
                    commit=False)
        db.session.commit()

        print('Database seeded successfully!')
        print('\nTest Accounts:')
        print('  Super admin: superadmin@nestsweets.com / super123')
        print('  Admin: admin@nestsweets.com / admin123')
        print('  Customer: customer@example.com / user123')


if __name__ == '__main__':
    seed_database()
