from typing import Optional
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field

class CallerIdentity(BaseModel):
    """Authenticated caller, as carried by a verified access token."""
    model_config = ConfigDict(frozen=True)

    user_id: UUID
    username: str

class LoginRequest(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None

class ChangePasswordRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    old_password: Optional[str] = Field(None, alias="oldPassword")
    new_password: Optional[str] = Field(None, alias="newPassword")

class TokenResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    username: str
    message: Optional[str] = None
