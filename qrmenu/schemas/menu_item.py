"""Menu item schemas"""

from datetime import datetime
from typing import Optional, List, Literal
from pydantic import BaseModel, Field, field_validator, model_validator

from qrmenu.schemas.common import two_decimals


class Addon(BaseModel):
    """Paid extra for an item"""
    name: str = Field(..., min_length=2, max_length=50)
    price: float = Field(..., gt=0)

    @field_validator("price")
    @classmethod
    def check_price(cls, value: float) -> float:
        return two_decimals(value)


class MenuItemCreate(BaseModel):
    """Create menu item request"""
    name: str = Field(..., min_length=2, max_length=100)
    description: Optional[str] = Field(None, max_length=300)
    category_id: int = Field(..., gt=0)
    menu_id: int = Field(..., gt=0)
    price_bgn: float = Field(..., gt=0)
    price_eur: float = Field(..., gt=0)
    weight: Optional[float] = Field(None, gt=0)
    weight_unit: Optional[Literal["g", "ml"]] = None
    image: Optional[str] = None
    tags: List[str] = []
    allergens: List[str] = []
    addons: List[Addon] = []
    order: Optional[int] = Field(None, ge=0)

    @field_validator("price_bgn", "price_eur")
    @classmethod
    def check_prices(cls, value):
        return two_decimals(value)

    @field_validator("tags", "allergens")
    @classmethod
    def short_labels(cls, values: List[str]) -> List[str]:
        for value in values:
            if len(value) > 20:
                raise ValueError("labels must be at most 20 characters")
        return values

    @model_validator(mode="after")
    def unit_required_with_weight(self):
        if self.weight is not None and self.weight_unit is None:
            raise ValueError("weight_unit is required when weight is given")
        return self


class MenuItemUpdate(BaseModel):
    """Update menu item request"""
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    description: Optional[str] = Field(None, max_length=300)
    category_id: Optional[int] = Field(None, gt=0)
    menu_id: Optional[int] = Field(None, gt=0)
    price_bgn: Optional[float] = Field(None, gt=0)
    price_eur: Optional[float] = Field(None, gt=0)
    weight: Optional[float] = Field(None, gt=0)
    weight_unit: Optional[Literal["g", "ml"]] = None
    image: Optional[str] = None
    tags: Optional[List[str]] = None
    allergens: Optional[List[str]] = None
    addons: Optional[List[Addon]] = None
    order: Optional[int] = Field(None, ge=0)
    available: Optional[bool] = None

    @field_validator("price_bgn", "price_eur")
    @classmethod
    def check_prices(cls, value):
        return two_decimals(value)


class AvailabilityUpdate(BaseModel):
    """Quick on/off switch for an item"""
    available: bool


class ItemCategorySummary(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True


class ItemMenuSummary(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True


class MenuItemResponse(BaseModel):
    """Menu item response"""
    id: int
    category_id: int
    menu_id: int
    name: str
    description: Optional[str]
    price_bgn: float
    price_eur: float
    weight: Optional[float]
    weight_unit: Optional[str]
    image: Optional[str]
    tags: List[str]
    allergens: List[str]
    addons: List[dict]
    order: int
    available: bool
    category: Optional[ItemCategorySummary] = None
    menu: Optional[ItemMenuSummary] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class MenuItemListResponse(BaseModel):
    """Paginated menu item list"""
    items: List[MenuItemResponse]
    total: int
    page: int
    page_size: int
