from fastapi import APIRouter, Depends, status
from app.dependencies.auth_dependencies import get_current_identity
from app.dependencies.service_dependencies import get_auth_service, get_user_service
from app.schemas.auth import CallerIdentity, ChangePasswordRequest, LoginRequest, TokenResponse
from app.schemas.user import UserResponse
from app.services.auth_service import AuthService
from app.services.user_service import UserService

router = APIRouter(prefix="/auth", tags=["auth"])

@router.post("/login", response_model=TokenResponse)
async def login(
    request: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Authenticate a user and return a JWT valid for one hour.
    """
    user, token = await auth_service.login_user(request)
    return TokenResponse(token=token, username=user.username)

@router.post("/change-password", status_code=status.HTTP_204_NO_CONTENT)
async def change_password(
    request: ChangePasswordRequest,
    identity: CallerIdentity = Depends(get_current_identity),
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Change the authenticated user's password after re-checking the old one.
    """
    await auth_service.change_password(identity, request)

@router.get("/me", response_model=UserResponse)
async def me(
    identity: CallerIdentity = Depends(get_current_identity),
    user_service: UserService = Depends(get_user_service)
):
    """
    Get the current authenticated user's details.
    """
    return await user_service.get_user(identity)
