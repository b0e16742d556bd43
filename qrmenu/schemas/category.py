"""Category schemas"""

from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field


class CategoryCreate(BaseModel):
    """Create category request; order is appended after the last sibling when omitted"""
    name: str = Field(..., min_length=2, max_length=50)
    description: Optional[str] = Field(None, max_length=200)
    image: Optional[str] = None
    order: Optional[int] = Field(None, ge=0)
    menu_id: int = Field(..., gt=0)


class CategoryUpdate(BaseModel):
    """Update category request"""
    name: Optional[str] = Field(None, min_length=2, max_length=50)
    description: Optional[str] = Field(None, max_length=200)
    image: Optional[str] = None
    order: Optional[int] = Field(None, ge=0)
    menu_id: Optional[int] = Field(None, gt=0)
    active: Optional[bool] = None


class CategoryMenuSummary(BaseModel):
    id: int
    name: str
    client_id: int

    class Config:
        from_attributes = True


class CategoryItemSummary(BaseModel):
    """Item row embedded in a category detail"""
    id: int
    name: str
    description: Optional[str]
    price_bgn: float
    price_eur: float
    weight: Optional[float]
    weight_unit: Optional[str]
    image: Optional[str]
    tags: List[str]
    allergens: List[str]
    order: int
    available: bool

    class Config:
        from_attributes = True


class CategoryResponse(BaseModel):
    """Category response"""
    id: int
    menu_id: int
    name: str
    description: Optional[str]
    image: Optional[str]
    order: int
    active: bool
    menu: Optional[CategoryMenuSummary] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class CategoryDetailResponse(CategoryResponse):
    """Category with its items in display order"""
    items: List[CategoryItemSummary] = []


class CategoryListResponse(BaseModel):
    """Paginated category list"""
    items: List[CategoryResponse]
    total: int
    page: int
    page_size: int


class CategoryReorderEntry(BaseModel):
    """Row of the reorder screen"""
    id: int
    name: str
    order: int
    active: bool
    item_count: int
