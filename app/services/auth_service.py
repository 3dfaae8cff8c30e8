from sqlalchemy.exc import SQLAlchemyError

from app.core.exceptions import (
    InvalidCredentialsException,
    InvalidInputException,
    InternalServerErrorException,
)
from app.core.log_config import logger
from app.core.security import hash_password, verify_password, create_access_token
from app.core.validators import validate_password, raise_for_errors
from app.models.user import User
from app.repositories.user_repository import UserRepository
from app.schemas.auth import CallerIdentity, ChangePasswordRequest, LoginRequest


def issue_token_for(user: User) -> str:
    return create_access_token(CallerIdentity(user_id=user.id, username=user.username))


class AuthService:
    def __init__(self, user_repository: UserRepository):
        self.users = user_repository

    async def login_user(self, request: LoginRequest):
        """
        Handles the logic for logging in a user.

        Args:
            request: Login credentials

        Returns:
            A tuple (user, access_token)

        Raises:
            InvalidInputException: If username or password is missing
            InvalidCredentialsException: If the user is unknown or the
                password does not match. Both cases share one message.
        """
        if not (request.username and request.password):
            raise InvalidInputException(detail="Username and password are required")

        user = await self.users.get_by_username(request.username)
        if not user or not verify_password(request.password, user.hashed_password):
            logger.warning(f"Rejected login attempt for username '{request.username}'")
            raise InvalidCredentialsException()

        logger.info(f"User {user.username} ({user.id}) logged in")
        return user, issue_token_for(user)

    async def change_password(self, identity: CallerIdentity, request: ChangePasswordRequest) -> None:
        """
        Re-authenticate the caller with their old password and store a new one.

        Raises:
            InvalidInputException: If either password is missing
            InvalidCredentialsException: If the caller's user no longer
                exists or the old password does not match
            ValidationException: If the new password violates its length
        """
        if not (request.old_password and request.new_password):
            raise InvalidInputException(detail="Old and new password are required")

        user = await self.users.get_by_id(identity.user_id)
        if not user or not verify_password(request.old_password, user.hashed_password):
            logger.warning(f"Rejected password change for {identity.username} ({identity.user_id})")
            raise InvalidCredentialsException()

        raise_for_errors(validate_password(request.new_password, field="new_password"))

        user.hashed_password = hash_password(request.new_password)
        try:
            await self.users.save(user)
        except SQLAlchemyError as e:
            logger.error(f"Failed to change password for {identity.username}: {e}", exc_info=True)
            raise InternalServerErrorException(detail="Failed to change password") from e

        logger.info(f"User {user.username} ({user.id}) changed their password")
