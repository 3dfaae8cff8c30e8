# app/core/exceptions.py

from typing import List

from fastapi import HTTPException, status

from app.schemas.error import FieldError

# Base Exception
class BaseAPIException(HTTPException):
    """Base class for all custom API exceptions."""
    def __init__(self, status_code: int, detail: str, headers: dict = None):
        super().__init__(status_code=status_code, detail=detail, headers=headers)


# Authentication Exceptions
class InvalidCredentialsException(BaseAPIException):
    """Exception raised when credentials are invalid."""
    def __init__(self, detail="Invalid username or password"):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)

class TokenExpiredException(BaseAPIException):
    """Exception raised when a token has expired."""
    def __init__(self, detail="Token has expired"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )

class InvalidTokenException(BaseAPIException):
    """Exception raised when a token is missing, malformed or badly signed."""
    def __init__(self, detail="Invalid token"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


# User Exceptions
class UserNotFoundException(BaseAPIException):
    """Exception raised when a user is not found."""
    def __init__(self, detail="User not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)

class UserAlreadyExistsException(BaseAPIException):
    """Exception raised when a username is already taken."""
    def __init__(self, detail="Username already in use"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)

class UserHostsRoomsException(BaseAPIException):
    """Exception raised when deleting a user who is still hosting rooms."""
    def __init__(self, detail="You're still the host of at least one room. Transfer host before deleting your account"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


# Room Exceptions
class RoomNotFoundException(BaseAPIException):
    """Exception raised when a room is not found."""
    def __init__(self, detail="Room not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)

class RoomFullException(BaseAPIException):
    """Exception raised when a room has reached its maximum capacity."""
    def __init__(self, detail="Cannot join, room is already full. Please check with the host"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)

class AlreadyRoomMemberException(BaseAPIException):
    """Exception raised when a user joins a room they are already in."""
    def __init__(self, detail="Action not permitted. You're in the room already"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)

class NotRoomMemberException(BaseAPIException):
    """Exception raised when a user leaves a room they are not in."""
    def __init__(self, detail="Action not permitted. You're not a participant of this room"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)

class HostCannotLeaveException(BaseAPIException):
    """Exception raised when the host tries to leave their own room."""
    def __init__(
        self,
        detail="Action not permitted. You're the host of this room. Select a participant as new host before leaving",
    ):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)

class NotRoomHostException(BaseAPIException):
    """Exception raised when a non-host attempts a host-only action."""
    def __init__(self, detail="Action not permitted. You're not the host of this room"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)

class InvalidHostException(BaseAPIException):
    """Exception raised when the requested new host is missing or unusable."""
    def __init__(self, detail="Action not permitted. Please select a user as the new host"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


# Validation & Input Exceptions
class ValidationException(BaseAPIException):
    """Exception raised when one or more fields violate their constraints."""
    def __init__(self, errors: List[FieldError], detail="Input data validation failed"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)
        self.errors = errors

class InvalidInputException(BaseAPIException):
    """Exception raised when input data is missing or malformed."""
    def __init__(self, detail="Invalid input data"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


# Database & System Exceptions
class InternalServerErrorException(BaseAPIException):
    """Exception raised for internal server errors."""
    def __init__(self, detail="Internal server error"):
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)
