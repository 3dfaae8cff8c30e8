import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import (
    InvalidCredentialsException,
    InvalidInputException,
    UserAlreadyExistsException,
    UserHostsRoomsException,
    UserNotFoundException,
    ValidationException,
)
from app.core.security import verify_password, verify_token
from app.repositories.room_repository import RoomRepository
from app.repositories.user_repository import UserRepository
from app.schemas.room import CreateRoomRequest
from app.schemas.user import CreateUserRequest, UpdateUserRequest
from app.services.room_service import RoomService
from app.services.user_service import UserService


@pytest.fixture
def user_service(async_session: AsyncSession):
    return UserService(UserRepository(async_session))


@pytest.fixture
def room_service(async_session: AsyncSession):
    return RoomService(RoomRepository(async_session), UserRepository(async_session))


@pytest.mark.asyncio
async def test_create_user(user_service):
    user, token = await user_service.create_user(
        CreateUserRequest(username="newuser", password="password123", mobile_token="device-1")
    )
    assert user.username == "newuser"
    assert user.mobile_token == "device-1"
    assert user.hashed_password != "password123"
    assert verify_password("password123", user.hashed_password)
    assert verify_token(token).user_id == user.id


@pytest.mark.asyncio
async def test_create_user_duplicate(user_service, test_user):
    with pytest.raises(UserAlreadyExistsException):
        await user_service.create_user(CreateUserRequest(username=test_user.username, password="password123"))


@pytest.mark.asyncio
async def test_create_user_validation(user_service):
    with pytest.raises(ValidationException) as exc_info:
        await user_service.create_user(CreateUserRequest(username="abc", password="pw"))
    assert {error.field for error in exc_info.value.errors} == {"username", "password"}
    assert await user_service.list_users() == []


@pytest.mark.asyncio
async def test_update_user(user_service, test_user, identity_for):
    await user_service.update_user(
        identity_for(test_user),
        UpdateUserRequest(old_password="password123", new_password="changed-pw", mobile_token="device-2"),
    )
    assert verify_password("changed-pw", test_user.hashed_password)
    assert test_user.mobile_token == "device-2"


@pytest.mark.asyncio
async def test_update_user_requires_both_passwords(user_service, test_user, identity_for):
    with pytest.raises(InvalidInputException):
        await user_service.update_user(identity_for(test_user), UpdateUserRequest(new_password="changed-pw"))


@pytest.mark.asyncio
async def test_update_user_wrong_old_password(user_service, test_user, identity_for):
    with pytest.raises(InvalidCredentialsException):
        await user_service.update_user(
            identity_for(test_user), UpdateUserRequest(old_password="wrong-pw", new_password="changed-pw")
        )


@pytest.mark.asyncio
async def test_delete_user_removes_memberships(user_service, room_service, alice, bob, identity_for):
    room = await room_service.create_room(identity_for(alice), CreateRoomRequest(name="Book Club"))
    await room_service.join_room(identity_for(bob), room.guid)

    await user_service.delete_user(identity_for(bob))

    with pytest.raises(UserNotFoundException):
        await user_service.get_user_by_username("bobby")
    room = await room_service.get_room_by_guid(room.guid)
    assert [participant.username for participant in room.participants] == ["alice"]


@pytest.mark.asyncio
async def test_delete_user_who_hosts_a_room_is_blocked(user_service, room_service, alice, identity_for):
    await room_service.create_room(identity_for(alice), CreateRoomRequest(name="Book Club"))
    with pytest.raises(UserHostsRoomsException):
        await user_service.delete_user(identity_for(alice))
    assert (await user_service.get_user_by_username("alice")).id == alice.id


@pytest.mark.asyncio
async def test_get_user_by_username_includes_rooms(user_service, room_service, alice, bob, identity_for):
    hosted = await room_service.create_room(identity_for(alice), CreateRoomRequest(name="Alice Room"))
    await room_service.join_room(identity_for(bob), hosted.guid)

    user = await user_service.get_user_by_username("bobby")
    assert user.hosted_rooms == []
    assert [room.guid for room in user.joined_rooms] == [hosted.guid]
