#!/usr/bin/env python3
"""
Create an admin or super admin account.

Usage: python create_admin.py [--super]
"""

import sys
from getpass import getpass
from nestsweets import create_app
from nestsweets.extensions import db
from nestsweets.models import User


def create_admin_user(email, password, name, phone='', role='admin'):
    """Create the account, or promote it when the email is already registered."""
    user = User.query.filter_by(email=email).first()
    if user:
        print(f"User with email {email} already exists (role: {user.role}).")
        update = input(f"Do you want to update this user to {role}? (yes/no): ").lower()
        if update == 'yes':
            user.role = role
            db.session.commit()
            print(f"✅ User {email} updated to {role}!")
        return user

    user = User(email=email, name=name, phone=phone or None, role=role)
    user.set_password(password)
    db.session.add(user)
    db.session.commit()
    print(f"✅ {role.title()} created successfully!")
    print(f"   Email: {email}")
    print(f"   Name: {name}")
    print("\n🔐 You can now log in with these credentials at /login")
    return user


def main():
    role = 'superadmin' if '--super' in sys.argv[1:] else 'admin'
    print("=" * 60)
    print(f"NestSweets - {role.title()} Creation")
    print("=" * 60)

    email = input("Email: ").strip().lower()
    password = getpass("Password: ").strip()
    name = input("Full Name: ").strip()
    phone = input("Phone (optional): ").strip()

    if not email or len(password) < 6 or not name:
        print("❌ Email, name and a password of at least 6 characters are required.")
        sys.exit(1)

    app = create_app()
    with app.app_context():
        db.create_all()
        create_admin_user(email, password, name, phone, role)


if __name__ == '__main__':
    main()
