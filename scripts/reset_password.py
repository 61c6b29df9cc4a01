#!/usr/bin/env python3
"""
Set a new password for an existing account
"""

import argparse
import asyncio
import sys
from getpass import getpass
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy.ext.asyncio import AsyncSession

from flixvault.database import AsyncSessionLocal
from flixvault.models.user import User
from flixvault.services.auth_service import AuthService
from flixvault.services.log_service import log_service

MIN_PASSWORD_LENGTH = 6


async def reset_password(db: AsyncSession, email: str, new_password: str) -> User:
    """
    Replace the password hash of the account registered under email.

    Raises ValueError for an unknown account or a too-short password.
    """
    if len(new_password) < MIN_PASSWORD_LENGTH:
        raise ValueError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        )

    auth_service = AuthService(db)
    user = await auth_service.get_user_by_email(email)
    if user is None:
        raise ValueError(f"No account registered for '{email}'")

    user.hashed_password = auth_service.get_password_hash(new_password)
    await db.commit()
    log_service.info(f"Password reset for user {user.id}")
    return user


def prompt_password() -> str:
    password = getpass("New password: ")
    if password != getpass("Repeat new password: "):
        raise ValueError("Passwords do not match")
    return password


async def main(email: str, new_password: str = None) -> int:
    try:
        password = new_password or prompt_password()
        async with AsyncSessionLocal() as db:
            user = await reset_password(db, email, password)
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    print(f"Password updated for {user.email}")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Reset an account password")
    parser.add_argument("--email", required=True, help="Account email")
    parser.add_argument(
        "--new-password", help="New password (prompted for when omitted)"
    )

    args = parser.parse_args()
    sys.exit(asyncio.run(main(args.email, args.new_password)))
