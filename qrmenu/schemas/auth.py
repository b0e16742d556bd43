"""Authentication schemas"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr

from qrmenu.models.user import UserRole


class Token(BaseModel):
    """JWT token response"""
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int


class RefreshRequest(BaseModel):
    """Token refresh request"""
    refresh_token: str


class UserCreate(BaseModel):
    """Create user request"""
    email: EmailStr
    password: str
    name: str
    role: UserRole = UserRole.CLIENT_VIEWER
    client_id: Optional[int] = None


class UserResponse(BaseModel):
    """User response"""
    id: int
    email: str
    name: Optional[str]
    role: UserRole
    client_id: Optional[int]
    is_active: bool
    created_at: datetime
    last_login: Optional[datetime]

    class Config:
        from_attributes = True
