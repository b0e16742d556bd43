"""Pydantic schemas for request/response validation"""

from qrmenu.schemas.auth import (
    Token,
    RefreshRequest,
    UserCreate,
    UserResponse,
)
from qrmenu.schemas.common import ReorderRequest, MessageResponse
from qrmenu.schemas.client import (
    ClientCreate,
    ClientUpdate,
    ClientResponse,
    ClientListResponse,
)
from qrmenu.schemas.template import (
    TemplateCreate,
    TemplateUpdate,
    TemplateResponse,
)
from qrmenu.schemas.menu import (
    MenuCreate,
    MenuUpdate,
    MenuResponse,
    MenuDetailResponse,
    MenuListResponse,
    PublicationStatus,
)
from qrmenu.schemas.category import (
    CategoryCreate,
    CategoryUpdate,
    CategoryResponse,
    CategoryDetailResponse,
    CategoryListResponse,
    CategoryReorderEntry,
)
from qrmenu.schemas.menu_item import (
    MenuItemCreate,
    MenuItemUpdate,
    MenuItemResponse,
    MenuItemListResponse,
    AvailabilityUpdate,
)
from qrmenu.schemas.public import (
    PublicMenuResponse,
    PublicMenuDetails,
    PublicCategorySummary,
    PublicItemsResponse,
    PublicTemplate,
)
from qrmenu.schemas.qr_code import QRCodeResponse

__all__ = [
    "Token",
    "RefreshRequest",
    "UserCreate",
    "UserResponse",
    "ReorderRequest",
    "MessageResponse",
    "ClientCreate",
    "ClientUpdate",
    "ClientResponse",
    "ClientListResponse",
    "TemplateCreate",
    "TemplateUpdate",
    "TemplateResponse",
    "MenuCreate",
    "MenuUpdate",
    "MenuResponse",
    "MenuDetailResponse",
    "MenuListResponse",
    "PublicationStatus",
    "CategoryCreate",
    "CategoryUpdate",
    "CategoryResponse",
    "CategoryDetailResponse",
    "CategoryListResponse",
    "CategoryReorderEntry",
    "MenuItemCreate",
    "MenuItemUpdate",
    "MenuItemResponse",
    "MenuItemListResponse",
    "AvailabilityUpdate",
    "PublicMenuResponse",
    "PublicMenuDetails",
    "PublicCategorySummary",
    "PublicItemsResponse",
    "PublicTemplate",
    "QRCodeResponse",
]
