from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database.postgres import get_db_session
from app.repositories.room_repository import RoomRepository
from app.repositories.user_repository import UserRepository
from app.services.auth_service import AuthService
from app.services.room_service import RoomService
from app.services.user_service import UserService

def get_user_repository(db: AsyncSession = Depends(get_db_session)) -> UserRepository:
    """
    Dependency that provides a UserRepository bound to the request's database session.
    """
    return UserRepository(db)

def get_room_repository(db: AsyncSession = Depends(get_db_session)) -> RoomRepository:
    """
    Dependency that provides a RoomRepository bound to the request's database session.
    """
    return RoomRepository(db)

def get_auth_service(users: UserRepository = Depends(get_user_repository)) -> AuthService:
    return AuthService(users)

def get_user_service(users: UserRepository = Depends(get_user_repository)) -> UserService:
    return UserService(users)

def get_room_service(
    rooms: RoomRepository = Depends(get_room_repository),
    users: UserRepository = Depends(get_user_repository),
) -> RoomService:
    """
    Dependency that provides a RoomService; both repositories share one session.
    """
    return RoomService(room_repository=rooms, user_repository=users)
