"""
Field validation for users and rooms.

Each check returns a list of ``FieldError``; an empty list means the value is
acceptable. Workflows collect the errors of every field they touch and call
``raise_for_errors`` once before anything is persisted.
"""
from typing import List, Optional

from app.core.exceptions import ValidationException
from app.schemas.error import FieldError

USERNAME_LENGTH = (4, 20)
PASSWORD_LENGTH = (4, 100)
ROOM_NAME_LENGTH = (4, 100)
MOBILE_TOKEN_MAX_LENGTH = 100


def check_length(field: str, value: Optional[str], min_length: int, max_length: int) -> List[FieldError]:
    if value is None:
        return [FieldError(field=field, message=f"{field} is required")]
    if not min_length <= len(value) <= max_length:
        return [
            FieldError(
                field=field,
                message=f"{field} must be between {min_length} and {max_length} characters long",
            )
        ]
    return []


def check_max_length(field: str, value: Optional[str], max_length: int) -> List[FieldError]:
    if value is not None and len(value) > max_length:
        return [FieldError(field=field, message=f"{field} must be at most {max_length} characters long")]
    return []


def check_positive(field: str, value: Optional[int]) -> List[FieldError]:
    if value is None or value < 1:
        return [FieldError(field=field, message=f"{field} must be a positive integer")]
    return []


def validate_password(password: Optional[str], field: str = "password") -> List[FieldError]:
    return check_length(field, password, *PASSWORD_LENGTH)


def validate_user_fields(
    username: Optional[str],
    password: Optional[str],
    mobile_token: Optional[str] = None,
) -> List[FieldError]:
    return (
        check_length("username", username, *USERNAME_LENGTH)
        + validate_password(password)
        + check_max_length("mobile_token", mobile_token, MOBILE_TOKEN_MAX_LENGTH)
    )


def validate_room_fields(name: Optional[str], capacity: Optional[int]) -> List[FieldError]:
    return check_length("name", name, *ROOM_NAME_LENGTH) + check_positive("capacity", capacity)


def raise_for_errors(errors: List[FieldError]) -> None:
    if errors:
        raise ValidationException(errors=errors)
