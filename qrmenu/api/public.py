"""
Public storefront API.

No authentication. Everything served here passes the publication gate:
an inactive client, an unpublished or inactive menu, an inactive category
or an unavailable item is never returned, whatever the query parameters.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from qrmenu.schemas.public import (
    PublicCategorySummary,
    PublicItemsResponse,
    PublicMenuDetails,
    PublicMenuResponse,
    PublicTemplate,
)
from qrmenu.services.public_menu import PublicMenuService
from qrmenu.services.templates import TemplateService
from qrmenu.api.deps import get_public_menu_service, get_template_service

router = APIRouter()


@router.get("/menu/{slug}", response_model=PublicMenuResponse)
async def get_public_menu(
    slug: str,
    service: PublicMenuService = Depends(get_public_menu_service),
):
    """Restaurant profile with its published menu"""
    return await service.get_storefront(slug)


@router.get("/menu/{slug}/details", response_model=PublicMenuDetails)
async def get_public_menu_details(
    slug: str,
    service: PublicMenuService = Depends(get_public_menu_service),
):
    return await service.get_menu_details(slug)


@router.get("/menu/{slug}/categories", response_model=List[PublicCategorySummary])
async def list_public_categories(
    slug: str,
    service: PublicMenuService = Depends(get_public_menu_service),
):
    return await service.list_categories(slug)


@router.get(
    "/menu/{slug}/categories/{category_id}/items",
    response_model=PublicItemsResponse,
)
async def list_public_category_items(
    slug: str,
    category_id: int,
    tags: Optional[str] = Query(None, description="Comma-separated, all must match"),
    search: Optional[str] = None,
    # Accepted for compatibility; unavailable items are never public
    available: Optional[bool] = None,
    service: PublicMenuService = Depends(get_public_menu_service),
):
    """Items of one category, optionally narrowed by tags and search"""
    return await service.list_category_items(slug, category_id, tags=tags, search=search)


@router.get("/templates/{template_id}", response_model=PublicTemplate)
async def get_public_template(
    template_id: int,
    service: TemplateService = Depends(get_template_service),
):
    """Active template config for the storefront"""
    return await service.get_template(template_id, active_only=True)
