from datetime import datetime
from typing import List, Optional
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field

class CreateUserRequest(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None
    mobile_token: Optional[str] = None

class UpdateUserRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    old_password: Optional[str] = Field(None, alias="oldPassword")
    new_password: Optional[str] = Field(None, alias="newPassword")
    mobile_token: Optional[str] = Field(None, alias="mobileToken")

class UserSummary(BaseModel):
    """Public projection of a user: never carries the password hash."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str

class UserResponse(UserSummary):
    created_at: Optional[datetime] = None

class RoomSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    guid: UUID
    name: str
    capacity: int

class UserDetailResponse(UserResponse):
    hosted_rooms: List[RoomSummary] = []
    joined_rooms: List[RoomSummary] = []
