"""
Admin bootstrap script: create (or promote) an admin user.

No API endpoint grants the admin role, so the first admin comes from here.

Usage:
    python -m scripts.create_admin --name "Ops" --email ops@example.com --password '...'

This will:
  1. Sync the schema (same as server startup)
  2. Create the user with role=admin, or promote the existing user with
     that email (their password is left unchanged)

Reads DATABASE_URL / JWT_SECRET / BCRYPT_SALT_ROUNDS from the environment.
"""

import argparse
import asyncio

from kijani.auth.hashing import hash_password
from kijani.core.config import Settings
from kijani.core.database import Database
from kijani.models.user import User, UserRole
from kijani.services.users import create_user, get_user_by_email


async def create_admin(settings: Settings, *, name: str, email: str, password: str) -> User:
    """Create or promote `email` to admin. Returns the stored user."""
    database = Database(settings)
    try:
        await database.sync_schema()

        async with database.session_factory() as session:
            user = await get_user_by_email(session, email)
            if user is not None:
                user.role = UserRole.ADMIN
                await session.commit()
                await session.refresh(user)
                return user

            password_hash = await asyncio.to_thread(
                hash_password, password, settings.BCRYPT_SALT_ROUNDS
            )
            return await create_user(
                session,
                name=name,
                email=email,
                password_hash=password_hash,
                role=UserRole.ADMIN,
            )
    finally:
        await database.dispose()


def main() -> None:
    parser = argparse.ArgumentParser(description="Create or promote an admin user.")
    parser.add_argument("--name", required=True)
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", required=True)
    args = parser.parse_args()

    settings = Settings()  # type: ignore[call-arg]
    user = asyncio.run(
        create_admin(settings, name=args.name, email=args.email, password=args.password)
    )

    print()
    print("=" * 60)
    print("  Admin ready")
    print("=" * 60)
    print()
    print(f"  User ID: {user.id}")
    print(f"  Email:   {user.email}")
    print(f"  Role:    {user.role.value}")
    print("=" * 60)
    print()


if __name__ == "__main__":
    main()
