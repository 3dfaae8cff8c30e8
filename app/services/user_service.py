from typing import List

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.core.exceptions import (
    InvalidCredentialsException,
    InvalidInputException,
    InternalServerErrorException,
    UserAlreadyExistsException,
    UserHostsRoomsException,
    UserNotFoundException,
)
from app.core.log_config import logger
from app.core.security import hash_password, verify_password
from app.core.validators import (
    MOBILE_TOKEN_MAX_LENGTH,
    check_max_length,
    raise_for_errors,
    validate_password,
    validate_user_fields,
)
from app.models.user import User
from app.repositories.user_repository import UserRepository
from app.schemas.auth import CallerIdentity
from app.schemas.user import CreateUserRequest, UpdateUserRequest
from app.services.auth_service import issue_token_for


class UserService:
    def __init__(self, user_repository: UserRepository):
        self.users = user_repository

    async def list_users(self) -> List[User]:
        return await self.users.list_all()

    async def get_user_by_username(self, username: str) -> User:
        """
        Fetch a user with the rooms they host and the rooms they joined.

        Raises:
            UserNotFoundException: If no user has this username
        """
        user = await self.users.get_by_username(username, with_rooms=True)
        if not user:
            raise UserNotFoundException()
        return user

    async def get_user(self, identity: CallerIdentity) -> User:
        user = await self.users.get_by_id(identity.user_id)
        if not user:
            raise UserNotFoundException()
        return user

    async def create_user(self, request: CreateUserRequest):
        """
        Sign up a new user and authenticate them straight away.

        Returns:
            A tuple (user, access_token)

        Raises:
            ValidationException: If username, password or mobile token
                violate their constraints
            UserAlreadyExistsException: If the username is taken
        """
        raise_for_errors(validate_user_fields(request.username, request.password, request.mobile_token))

        if await self.users.get_by_username(request.username):
            raise UserAlreadyExistsException()

        user = User(
            username=request.username,
            hashed_password=hash_password(request.password),
            mobile_token=request.mobile_token,
        )
        try:
            await self.users.save(user)
        except IntegrityError as e:
            # Lost a race with a concurrent signup for the same username.
            raise UserAlreadyExistsException() from e
        except SQLAlchemyError as e:
            logger.error(f"Failed to create user {request.username}: {e}", exc_info=True)
            raise InternalServerErrorException(detail="Failed to create user") from e

        logger.info(f"User {user.username} ({user.id}) created")
        return user, issue_token_for(user)

    async def update_user(self, identity: CallerIdentity, request: UpdateUserRequest) -> None:
        """
        Update the caller's password and, optionally, their mobile token.

        Raises:
            InvalidInputException: If old or new password is missing
            UserNotFoundException: If the caller's user no longer exists
            InvalidCredentialsException: If the old password does not match
            ValidationException: If a new value violates its constraints
        """
        if not (request.old_password and request.new_password):
            raise InvalidInputException(detail="Old and new password are required")

        user = await self.users.get_by_id(identity.user_id)
        if not user:
            raise UserNotFoundException()
        if not verify_password(request.old_password, user.hashed_password):
            logger.warning(f"Rejected profile update for {user.username}: wrong password")
            raise InvalidCredentialsException()

        raise_for_errors(
            validate_password(request.new_password, field="new_password")
            + check_max_length("mobile_token", request.mobile_token, MOBILE_TOKEN_MAX_LENGTH)
        )

        user.hashed_password = hash_password(request.new_password)
        if request.mobile_token is not None:
            user.mobile_token = request.mobile_token
        try:
            await self.users.save(user)
        except SQLAlchemyError as e:
            logger.error(f"Failed to update user {identity.username}: {e}", exc_info=True)
            raise InternalServerErrorException(detail="Failed to update user") from e

        logger.info(f"User {user.username} ({user.id}) updated")

    async def delete_user(self, identity: CallerIdentity) -> None:
        """
        Hard-delete the caller's account.

        A user who still hosts a room must hand it over first; their
        participant memberships are removed together with the account.

        Raises:
            UserNotFoundException: If the caller's user no longer exists
            UserHostsRoomsException: If the user hosts at least one room
        """
        user = await self.users.get_by_id(identity.user_id, with_rooms=True)
        if not user:
            raise UserNotFoundException()
        if user.hosted_rooms:
            raise UserHostsRoomsException()

        try:
            await self.users.delete(user)
        except SQLAlchemyError as e:
            logger.error(f"Failed to delete user {identity.username}: {e}", exc_info=True)
            raise InternalServerErrorException(detail="Failed to delete user") from e

        logger.info(f"User {identity.username} ({identity.user_id}) deleted")
