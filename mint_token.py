#!/usr/bin/env python3
"""Quick script to mint an access token for an existing member.

Useful for local development and smoke tests, since login is handled by the
identity service.
"""
import sys

from app.core.security import create_access_token
from app.db import get_db_context
from app.db.models import User

if len(sys.argv) != 2 or not sys.argv[1].isdigit():
    print("Usage: python mint_token.py <user-id>")
    print()
    print("Example:")
    print("  python mint_token.py 12")
    sys.exit(1)

user_id = int(sys.argv[1])

with get_db_context() as db:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        print(f"Error: no user with id {user_id}")
        sys.exit(1)
    if not user.is_active:
        print(f"Error: user {user_id} is inactive")
        sys.exit(1)
    token = create_access_token({"sub": user.id, "role": user.role})
    name, role = user.name, user.role

print(f"Access token for {name} ({role}):")
print("-" * 80)
print(token)
print("-" * 80)
print("Send it as:  Authorization: Bearer <token>")
