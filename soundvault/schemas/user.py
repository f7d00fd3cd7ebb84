"""
Pydantic schemas for User entity.
"""
from pydantic import BaseModel
from typing import Optional
from datetime import datetime
from soundvault.models.user import AccountStatus


class UserCredentials(BaseModel):
    """Schema for registration and login. Emptiness is checked by the service."""
    username: Optional[str] = None
    password: Optional[str] = None


class UserUpdate(BaseModel):
    """Schema for username update."""
    username: Optional[str] = None


class UserResponse(BaseModel):
    """Schema for user response."""
    id: int
    username: str
    picture: Optional[str] = None
    status: AccountStatus
    created_at: datetime

    class Config:
        from_attributes = True


class LoginResponse(BaseModel):
    """Schema for login response."""
    token: str
    picture: Optional[str] = None


class TokenCheck(BaseModel):
    """Schema for token validity check."""
    token: Optional[str] = None


class PictureUpdateResponse(BaseModel):
    """Schema for picture upload response."""
    success: bool
    path: str
