from uuid import UUID
from typing import List

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..core.config import settings
from ..core.log_config import logger
from ..core.validators import raise_for_errors, validate_room_fields
from ..models.room import Room
from ..models.user import User
from ..repositories.room_repository import RoomRepository
from ..repositories.user_repository import UserRepository
from ..schemas.auth import CallerIdentity
from ..schemas.room import ChangeHostRequest, CreateRoomRequest
from ..core.exceptions import (
    AlreadyRoomMemberException,
    HostCannotLeaveException,
    InternalServerErrorException,
    InvalidHostException,
    NotRoomHostException,
    NotRoomMemberException,
    RoomFullException,
    RoomNotFoundException,
    UserNotFoundException,
)

class RoomService:
    def __init__(self, room_repository: RoomRepository, user_repository: UserRepository):
        self.rooms = room_repository
        self.users = user_repository

    async def _get_room(self, guid: str, for_update: bool = False) -> Room:
        # An unparseable guid names no room.
        try:
            room_guid = UUID(str(guid))
        except ValueError:
            raise RoomNotFoundException()
        room = await self.rooms.get_by_guid(room_guid, for_update=for_update)
        if not room:
            raise RoomNotFoundException()
        return room

    async def _get_caller(self, identity: CallerIdentity) -> User:
        user = await self.users.get_by_id(identity.user_id)
        if not user:
            raise UserNotFoundException()
        return user

    async def _save(self, room: Room, action: str, on_conflict=None) -> None:
        try:
            await self.rooms.save(room)
        except IntegrityError as e:
            if on_conflict is None:
                logger.error(f"Failed to {action}: {e}", exc_info=True)
                raise InternalServerErrorException(detail=f"Failed to {action}") from e
            raise on_conflict() from e
        except SQLAlchemyError as e:
            logger.error(f"Failed to {action}: {e}", exc_info=True)
            raise InternalServerErrorException(detail=f"Failed to {action}") from e

    async def create_room(self, identity: CallerIdentity, request: CreateRoomRequest) -> Room:
        """
        Create a new room hosted by the caller, who joins it immediately.

        Args:
            identity: Authenticated caller, becomes the host
            request: Room creation request

        Returns:
            The persisted room with host and participants loaded

        Raises:
            ValidationException: If the name or capacity is invalid
            UserNotFoundException: If the caller's user no longer exists
        """
        capacity = request.capacity if request.capacity is not None else settings.default_room_capacity
        raise_for_errors(validate_room_fields(request.name, capacity))

        host = await self._get_caller(identity)
        room = Room(
            name=request.name,
            capacity=capacity,
            host=host,
            participants=[host],
        )
        await self._save(room, "create room")

        logger.info(f"Room '{room.name}' ({room.guid}) created by {host.username}")
        return room

    async def list_rooms(self) -> List[Room]:
        return await self.rooms.list_all()

    async def get_room_by_guid(self, guid: str) -> Room:
        return await self._get_room(guid)

    async def join_room(self, identity: CallerIdentity, guid: str) -> None:
        """
        Add the caller to a room's participants.

        The capacity check runs before the membership check, so a full room
        reports full even to someone already inside it.

        Raises:
            RoomNotFoundException: If no room has this guid
            RoomFullException: If the participant set is at capacity
            AlreadyRoomMemberException: If the caller is already a participant
        """
        room = await self._get_room(guid, for_update=True)
        if room.is_full:
            raise RoomFullException()
        if room.has_participant(identity.user_id):
            raise AlreadyRoomMemberException()

        user = await self._get_caller(identity)
        room.participants.append(user)
        # A concurrent join of the same user trips the participants primary key.
        await self._save(room, "join room", on_conflict=AlreadyRoomMemberException)

        logger.info(f"User {user.username} joined room {room.guid} ({len(room.participants)}/{room.capacity})")

    async def leave_room(self, identity: CallerIdentity, guid: str) -> None:
        """
        Remove the caller from a room's participants.

        Raises:
            RoomNotFoundException: If no room has this guid
            HostCannotLeaveException: If the caller hosts the room
            NotRoomMemberException: If the caller is not a participant
        """
        room = await self._get_room(guid, for_update=True)
        if room.host_id == identity.user_id:
            raise HostCannotLeaveException()

        participant = next((p for p in room.participants if p.id == identity.user_id), None)
        if participant is None:
            raise NotRoomMemberException()

        room.participants.remove(participant)
        await self._save(room, "leave room")

        logger.info(f"User {identity.username} left room {room.guid}")

    async def change_host(self, identity: CallerIdentity, guid: str, request: ChangeHostRequest) -> None:
        """
        Hand the host role over to another user. The demoted host stays in
        the room as a participant.

        Raises:
            InvalidHostException: If no new host is given, it is the caller,
                or no such user exists
            RoomNotFoundException: If no room has this guid
            NotRoomHostException: If the caller is not the current host
            RoomFullException: If re-adding the old host would exceed capacity
        """
        if request.user_id is None:
            raise InvalidHostException()
        if request.user_id == identity.user_id:
            raise InvalidHostException(detail="No changes made as you're still the host of this room")

        room = await self._get_room(guid, for_update=True)
        if room.host_id != identity.user_id:
            raise NotRoomHostException()

        new_host = await self.users.get_by_id(request.user_id)
        if not new_host:
            raise InvalidHostException(detail="Action not permitted. Can't find specified user as the new host")

        old_host = room.host
        readd_old_host = not room.has_participant(old_host.id)
        if readd_old_host and room.is_full:
            raise RoomFullException(detail="Cannot keep the previous host in the room, it is already full")

        room.host = new_host
        if readd_old_host:
            room.participants.append(old_host)
        await self._save(room, "change host")

        logger.info(f"Room {room.guid} host changed from {old_host.username} to {new_host.username}")

    async def search_user_rooms(self, username: str) -> List[Room]:
        """
        List the rooms a user takes part in.

        Raises:
            UserNotFoundException: If no user has this username
        """
        user = await self.users.get_by_username(username)
        if not user:
            raise UserNotFoundException()
        return await self.rooms.list_for_participant(user.id)
