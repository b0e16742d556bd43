"""Client schemas"""

from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field, field_validator


SLUG_PATTERN = r"^[a-z0-9-]+$"


class SocialMedia(BaseModel):
    """Social media links"""
    facebook: Optional[str] = None
    instagram: Optional[str] = None
    website: Optional[str] = None


class ClientCreate(BaseModel):
    """Create client request"""
    name: str = Field(..., min_length=2, max_length=100)
    slug: str = Field(..., min_length=2, max_length=50, pattern=SLUG_PATTERN)
    description: Optional[str] = Field(None, max_length=500)
    address: Optional[str] = Field(None, max_length=200)
    phone: Optional[str] = Field(None, pattern=r"^\+?[0-9\s\-\(\)]{8,20}$")
    logo: Optional[str] = None
    slogan: Optional[str] = Field(None, max_length=100)
    social_media: SocialMedia = Field(default_factory=SocialMedia)

    @field_validator("slug", mode="before")
    @classmethod
    def lowercase_slug(cls, value):
        return value.strip().lower() if isinstance(value, str) else value


class ClientUpdate(BaseModel):
    """Update client request"""
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    slug: Optional[str] = Field(None, min_length=2, max_length=50, pattern=SLUG_PATTERN)
    description: Optional[str] = Field(None, max_length=500)
    address: Optional[str] = Field(None, max_length=200)
    phone: Optional[str] = Field(None, pattern=r"^\+?[0-9\s\-\(\)]{8,20}$")
    logo: Optional[str] = None
    slogan: Optional[str] = Field(None, max_length=100)
    social_media: Optional[SocialMedia] = None
    active: Optional[bool] = None

    @field_validator("slug", mode="before")
    @classmethod
    def lowercase_slug(cls, value):
        return value.strip().lower() if isinstance(value, str) else value


class ClientSummary(BaseModel):
    """Client reference embedded in other responses"""
    id: int
    name: str
    slug: str

    class Config:
        from_attributes = True


class ClientMenuSummary(BaseModel):
    """Menu reference embedded in client responses"""
    id: int
    name: str
    active: bool
    published: bool

    class Config:
        from_attributes = True


class ClientResponse(BaseModel):
    """Client response"""
    id: int
    name: str
    slug: str
    description: Optional[str]
    address: Optional[str]
    phone: Optional[str]
    logo: Optional[str]
    slogan: Optional[str]
    social_media: Optional[dict]
    active: bool
    menu: Optional[ClientMenuSummary] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ClientListResponse(BaseModel):
    """Paginated client list"""
    items: List[ClientResponse]
    total: int
    page: int
    page_size: int
