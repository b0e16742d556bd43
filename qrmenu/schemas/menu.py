"""Menu schemas"""

from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field

from qrmenu.schemas.client import ClientSummary
from qrmenu.schemas.template import TemplateSummary


class MenuCreate(BaseModel):
    """Create menu request"""
    name: str = Field(..., min_length=2, max_length=100)
    client_id: int = Field(..., gt=0)
    template_id: Optional[int] = Field(None, gt=0)


class MenuUpdate(BaseModel):
    """Update menu request; publishing goes through the publish endpoint"""
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    template_id: Optional[int] = Field(None, gt=0)
    active: Optional[bool] = None


class MenuCategorySummary(BaseModel):
    id: int
    name: str
    description: Optional[str]
    image: Optional[str]
    order: int
    active: bool

    class Config:
        from_attributes = True


class MenuResponse(BaseModel):
    """Menu response"""
    id: int
    client_id: int
    template_id: Optional[int]
    name: str
    active: bool
    published: bool
    qr_code: Optional[str]
    client: Optional[ClientSummary] = None
    template: Optional[TemplateSummary] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class MenuDetailResponse(MenuResponse):
    """Menu with its categories in display order"""
    categories: List[MenuCategorySummary] = []
    category_count: int = 0
    item_count: int = 0


class MenuListResponse(BaseModel):
    """Paginated menu list"""
    items: List[MenuResponse]
    total: int
    page: int
    page_size: int


class PublicationStatus(BaseModel):
    """Result of publish/unpublish"""
    id: int
    published: bool
    active: bool

    class Config:
        from_attributes = True
