from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.room import Room
from app.models.user import User


class RoomRepository:
    """Persistence for ``Room`` records and their participant sets."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _with_members(self):
        # Membership changes within the same session must be visible on re-read.
        return (
            select(Room)
            .options(selectinload(Room.host), selectinload(Room.participants))
            .execution_options(populate_existing=True)
        )

    async def get_by_guid(self, guid: UUID, for_update: bool = False) -> Optional[Room]:
        """
        Load a room with its host and participants.

        With ``for_update`` the room row stays locked until the transaction
        ends, so a read-check-write on its membership cannot interleave with
        another request's.
        """
        query = self._with_members().filter(Room.guid == guid)
        if for_update:
            query = query.with_for_update()
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def list_all(self) -> List[Room]:
        result = await self.db.execute(self._with_members().order_by(Room.name))
        return list(result.scalars().all())

    async def list_for_participant(self, user_id: UUID) -> List[Room]:
        result = await self.db.execute(
            self._with_members()
            .join(Room.participants)
            .filter(User.id == user_id)
            .order_by(Room.name)
        )
        return list(result.scalars().unique().all())

    async def save(self, room: Room) -> Room:
        """
        Add or update a room, including its participant set, and commit.

        Raises:
            IntegrityError: If a participant row already exists
        """
        self.db.add(room)
        try:
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
        return room
