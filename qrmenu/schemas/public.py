"""Public storefront schemas"""

from typing import Optional, List, Dict, Any
from pydantic import BaseModel


class PublicClient(BaseModel):
    name: str
    slug: str
    description: Optional[str]
    address: Optional[str]
    phone: Optional[str]
    logo: Optional[str]
    slogan: Optional[str]
    social_media: Optional[dict]

    class Config:
        from_attributes = True


class PublicTemplate(BaseModel):
    id: int
    name: str
    config: Dict[str, Any]

    class Config:
        from_attributes = True


class PublicItem(BaseModel):
    id: int
    category_id: int
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

    class Config:
        from_attributes = True


class PublicCategory(BaseModel):
    id: int
    name: str
    description: Optional[str]
    image: Optional[str]
    order: int
    items: List[PublicItem] = []


class PublicCategorySummary(BaseModel):
    id: int
    name: str
    description: Optional[str]
    image: Optional[str]
    order: int
    item_count: int


class PublicMenuDetails(BaseModel):
    id: int
    name: str
    template: Optional[PublicTemplate] = None

    class Config:
        from_attributes = True


class PublicMenu(PublicMenuDetails):
    categories: List[PublicCategory] = []


class PublicMenuResponse(BaseModel):
    """Full storefront payload for one restaurant"""
    client: PublicClient
    menu: PublicMenu


class PublicItemsResponse(BaseModel):
    items: List[PublicItem]
    total: int
    category: str
