from typing import List, Optional
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field

from app.schemas.user import UserSummary

class CreateRoomRequest(BaseModel):
    name: Optional[str] = Field(None, description="Room name, 4 to 100 characters")
    capacity: Optional[int] = Field(None, description="Maximum number of participants, host included")

class ChangeHostRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: Optional[UUID] = Field(None, alias="userId", description="ID of the user who becomes host")

class RoomResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    guid: UUID
    name: str
    capacity: int
    host: UserSummary
    participants: List[UserSummary] = []

class MessageResponse(BaseModel):
    message: str
