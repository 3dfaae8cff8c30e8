from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.user import User


class UserRepository:
    """Persistence for ``User`` records over a request-scoped session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, user_id: UUID, with_rooms: bool = False) -> Optional[User]:
        query = select(User).filter(User.id == user_id)
        if with_rooms:
            query = query.options(selectinload(User.hosted_rooms), selectinload(User.joined_rooms))
        result = await self.db.execute(query.execution_options(populate_existing=True))
        return result.scalar_one_or_none()

    async def get_by_username(self, username: str, with_rooms: bool = False) -> Optional[User]:
        query = select(User).filter(User.username == username)
        if with_rooms:
            query = query.options(selectinload(User.hosted_rooms), selectinload(User.joined_rooms))
        result = await self.db.execute(query.execution_options(populate_existing=True))
        return result.scalar_one_or_none()

    async def list_all(self) -> List[User]:
        result = await self.db.execute(select(User).order_by(User.username))
        return list(result.scalars().all())

    async def save(self, user: User) -> User:
        """
        Add or update a user and commit.

        Raises:
            IntegrityError: If the username is already taken
        """
        self.db.add(user)
        try:
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
        return user

    async def delete(self, user: User) -> None:
        """
        Hard-delete a user. Their participant memberships go with them, so
        ``joined_rooms`` must be loaded.
        """
        await self.db.delete(user)
        try:
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
