#!/usr/bin/env python3
"""Create or update a host account with an email/password login."""

import sys
from pathlib import Path

# Make the backend package importable when run from anywhere
BASE_DIR = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(BASE_DIR))

from rsvp_app.core.security import get_password_hash
from rsvp_app.db import build_store
from rsvp_app.models import User


def create_user():
    print("=" * 60)
    print("Create host account")
    print("=" * 60)

    email = input("Email: ").strip().lower()
    if not email:
        print("Error: email is required")
        return

    name = input("Name (optional): ").strip() or None
    password = input("Password: ").strip()
    if len(password) < 8:
        print("Error: password must be at least 8 characters")
        return

    store = build_store()
    with store.atomic():
        existing = store.get_user_by_email(email)
        if existing:
            print(f"\nA user with email {email} already exists!")
            response = input("Update the existing user? (y/n): ").strip().lower()
            if response != "y":
                print("Cancelled")
                return
            user = existing
            user.name = name
            user.hashed_password = get_password_hash(password)
            user.touch()
        else:
            user = User(
                email=email,
                name=name,
                hashed_password=get_password_hash(password),
            )
        user = store.put_user(user)

    print(f"\nUser {'updated' if existing else 'created'}.")
    print(f"  ID: {user.id}")
    print(f"  Email: {user.email}")


if __name__ == "__main__":
    create_user()
