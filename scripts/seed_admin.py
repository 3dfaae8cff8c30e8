import asyncio
import sys
from pathlib import Path

# Add the project root directory to the Python path
project_root = Path(__file__).resolve().parent.parent
sys.path.append(str(project_root))

from app.core.config import settings
from app.core.log_config import logger
from app.core.security import hash_password
from app.database.postgres import async_session, dispose_db, initialize_db
from app.models.user import User
from app.repositories.user_repository import UserRepository

async def seed_admin():
    """
    Create the database tables and the admin account, if they do not exist yet.
    """
    await initialize_db()

    async with async_session() as session:
        users = UserRepository(session)
        if await users.get_by_username(settings.admin_username):
            logger.info(f"Admin user '{settings.admin_username}' already exists, nothing to do.")
            return

        admin = User(
            username=settings.admin_username,
            hashed_password=hash_password(settings.admin_password),
        )
        await users.save(admin)
        logger.info(f"Admin user '{admin.username}' created.")

async def main():
    try:
        await seed_admin()
    finally:
        await dispose_db()

if __name__ == "__main__":
    asyncio.run(main())
