from fastapi import APIRouter, Depends, status
from typing import List

from ..schemas.auth import CallerIdentity
from ..schemas.room import ChangeHostRequest, CreateRoomRequest, MessageResponse, RoomResponse
from ..services.room_service import RoomService
from app.dependencies.service_dependencies import get_room_service
from app.dependencies.auth_dependencies import get_current_identity

router = APIRouter(prefix="/rooms", tags=["rooms"])

@router.post("", response_model=RoomResponse, status_code=status.HTTP_201_CREATED)
async def create_room(
    request: CreateRoomRequest,
    identity: CallerIdentity = Depends(get_current_identity),
    room_service: RoomService = Depends(get_room_service)
):
    """
    Create a room hosted by the authenticated user.

    Args:
        request: Room creation request
        identity: Authenticated caller, becomes host and first participant
        room_service: Room service instance

    Returns:
        RoomResponse with created room details
    """
    return await room_service.create_room(identity, request)

@router.get("", response_model=List[RoomResponse])
async def list_rooms(room_service: RoomService = Depends(get_room_service)):
    """
    List every room with its host and participants.
    """
    return await room_service.list_rooms()

@router.get("/user/{username}", response_model=List[RoomResponse])
async def search_user_rooms(
    username: str,
    room_service: RoomService = Depends(get_room_service)
):
    """
    List the rooms a given user is a participant of.
    """
    return await room_service.search_user_rooms(username)

@router.get("/{guid}", response_model=RoomResponse)
async def get_room(guid: str, room_service: RoomService = Depends(get_room_service)):
    return await room_service.get_room_by_guid(guid)

@router.post("/{guid}/join", response_model=MessageResponse)
async def join_room(
    guid: str,
    identity: CallerIdentity = Depends(get_current_identity),
    room_service: RoomService = Depends(get_room_service)
):
    """
    Join a room.

    Args:
        guid: Public identifier of the room
        identity: Authenticated caller
        room_service: Room service instance
    """
    await room_service.join_room(identity, guid)
    return MessageResponse(message="Successfully joined the room")

@router.post("/{guid}/leave", response_model=MessageResponse)
async def leave_room(
    guid: str,
    identity: CallerIdentity = Depends(get_current_identity),
    room_service: RoomService = Depends(get_room_service)
):
    """
    Leave a room. Hosts have to hand over the room first.
    """
    await room_service.leave_room(identity, guid)
    return MessageResponse(message="Successfully left the room")

@router.post("/{guid}/change-host", response_model=MessageResponse)
async def change_host(
    guid: str,
    request: ChangeHostRequest,
    identity: CallerIdentity = Depends(get_current_identity),
    room_service: RoomService = Depends(get_room_service)
):
    """
    Make another user the host of a room the caller hosts.

    Args:
        guid: Public identifier of the room
        request: Carries the new host's user ID
        identity: Authenticated caller, must be the current host
        room_service: Room service instance
    """
    await room_service.change_host(identity, guid, request)
    return MessageResponse(message="Successfully changed the host of this room")
