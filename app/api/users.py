from typing import List

from fastapi import APIRouter, Depends, status

from app.dependencies.auth_dependencies import get_current_identity
from app.dependencies.service_dependencies import get_user_service
from app.schemas.auth import CallerIdentity, TokenResponse
from app.schemas.user import CreateUserRequest, UpdateUserRequest, UserDetailResponse, UserResponse
from app.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])

@router.get("", response_model=List[UserResponse])
async def list_users(user_service: UserService = Depends(get_user_service)):
    """
    List all users. Passwords and mobile tokens are never returned.
    """
    return await user_service.list_users()

@router.get("/{username}", response_model=UserDetailResponse)
async def get_user(username: str, user_service: UserService = Depends(get_user_service)):
    """
    Get a user by username, with the rooms they host and have joined.
    """
    return await user_service.get_user_by_username(username)

@router.post("", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    request: CreateUserRequest,
    user_service: UserService = Depends(get_user_service),
):
    """
    Sign up a new user and return a token for them.
    """
    user, token = await user_service.create_user(request)
    return TokenResponse(token=token, username=user.username, message="User created and authenticated")

@router.patch("", status_code=status.HTTP_204_NO_CONTENT)
async def update_user(
    request: UpdateUserRequest,
    identity: CallerIdentity = Depends(get_current_identity),
    user_service: UserService = Depends(get_user_service),
):
    """
    Update the authenticated user's password and mobile token.
    """
    await user_service.update_user(identity, request)

@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    identity: CallerIdentity = Depends(get_current_identity),
    user_service: UserService = Depends(get_user_service),
):
    """
    Delete the authenticated user's account.
    """
    await user_service.delete_user(identity)
