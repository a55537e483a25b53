import asyncio
import getpass

from sqlalchemy import select

from character_manager.db.database import AsyncSessionLocal
from character_manager.db.models.user import User
from character_manager.db.models import character, lookup  # noqa: F401  Base registry용
from character_manager.core.security import get_password_hash
from character_manager.services.auth_service import normalize_username, USERNAME_MIN_LENGTH, USERNAME_MAX_LENGTH


async def create_superuser(username: str, password: str) -> bool:
    """Creates a user with the admin role. Returns False if the name is taken or invalid."""
    username = normalize_username(username)
    if not (USERNAME_MIN_LENGTH <= len(username) <= USERNAME_MAX_LENGTH) or not password:
        print("Username must be 3-20 characters and password is required.")
        return False

    async with AsyncSessionLocal() as session:
        # Check existing
        existing = await session.execute(select(User).where(User.username == username))
        if existing.scalar_one_or_none():
            print(f"User {username} already exists!")
            return False

        print("Creating superuser...")
        admin_user = User(
            username=username,
            password_hash=get_password_hash(password),
            role="admin",  # 관리자 권한 부여
        )
        session.add(admin_user)
        await session.commit()

    print(f"Superuser '{username}' created successfully!")
    return True


if __name__ == "__main__":
    name = input("Enter Admin Username: ")
    secret = getpass.getpass("Enter Admin Password: ")
    asyncio.run(create_superuser(name, secret))
