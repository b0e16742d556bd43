"""Menu item management API endpoints"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from qrmenu.config import settings
from qrmenu.models.user import User, UserRole
from qrmenu.schemas.common import MessageResponse, ReorderRequest
from qrmenu.schemas.menu_item import (
    MenuItemCreate,
    MenuItemUpdate,
    MenuItemResponse,
    MenuItemListResponse,
    AvailabilityUpdate,
)
from qrmenu.services.hierarchy import HierarchyService
from qrmenu.services.menu_items import MenuItemService
from qrmenu.api.auth import get_current_active_user, verify_client_access, client_scope
from qrmenu.api.deps import get_menu_item_service, get_hierarchy_service

router = APIRouter()


async def load_editable_item(item_id: int, current_user: User, service: MenuItemService):
    if not current_user.has_permission(UserRole.CLIENT_ADMIN):
        raise HTTPException(status_code=403, detail="Insufficient permissions")
    item = await service.get_item(item_id)
    verify_client_access(item.menu.client_id, current_user)
    return item


@router.get("", response_model=MenuItemListResponse)
async def list_menu_items(
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    menu_id: Optional[int] = None,
    category_id: Optional[int] = None,
    available: Optional[bool] = None,
    tags: Optional[str] = Query(None, description="Comma-separated, any may match"),
    search: Optional[str] = None,
    current_user: User = Depends(get_current_active_user),
    service: MenuItemService = Depends(get_menu_item_service),
):
    """List menu items with filters, in display order"""
    return await service.list_items(
        page,
        page_size,
        menu_id=menu_id,
        category_id=category_id,
        available=available,
        tags=tags,
        search=search,
        client_id=client_scope(current_user),
    )


@router.post("", response_model=MenuItemResponse, status_code=status.HTTP_201_CREATED)
async def create_menu_item(
    item_data: MenuItemCreate,
    current_user: User = Depends(get_current_active_user),
    service: MenuItemService = Depends(get_menu_item_service),
    hierarchy: HierarchyService = Depends(get_hierarchy_service),
):
    """Create a menu item inside a category of the given menu"""
    if not current_user.has_permission(UserRole.CLIENT_ADMIN):
        raise HTTPException(status_code=403, detail="Insufficient permissions")
    verify_client_access(await hierarchy.client_id_for_category(item_data.category_id), current_user)
    return await service.create_item(item_data)


@router.get("/{item_id}", response_model=MenuItemResponse)
async def get_menu_item(
    item_id: int,
    current_user: User = Depends(get_current_active_user),
    service: MenuItemService = Depends(get_menu_item_service),
):
    """Get a specific menu item"""
    item = await service.get_item(item_id)
    verify_client_access(item.menu.client_id, current_user)
    return item


@router.put("/{item_id}", response_model=MenuItemResponse)
async def update_menu_item(
    item_id: int,
    item_data: MenuItemUpdate,
    current_user: User = Depends(get_current_active_user),
    service: MenuItemService = Depends(get_menu_item_service),
    hierarchy: HierarchyService = Depends(get_hierarchy_service),
):
    """Update a menu item"""
    await load_editable_item(item_id, current_user, service)
    if item_data.category_id is not None:
        verify_client_access(
            await hierarchy.client_id_for_category(item_data.category_id), current_user
        )
    return await service.update_item(item_id, item_data)


@router.delete("/{item_id}", response_model=MessageResponse)
async def delete_menu_item(
    item_id: int,
    current_user: User = Depends(get_current_active_user),
    service: MenuItemService = Depends(get_menu_item_service),
):
    """Delete a menu item"""
    await load_editable_item(item_id, current_user, service)
    await service.delete_item(item_id)
    return MessageResponse(message="Menu item deleted")


@router.put("/{item_id}/availability", response_model=MenuItemResponse)
async def set_menu_item_availability(
    item_id: int,
    availability: AvailabilityUpdate,
    current_user: User = Depends(get_current_active_user),
    service: MenuItemService = Depends(get_menu_item_service),
):
    """Switch an item on or off without editing it"""
    await load_editable_item(item_id, current_user, service)
    return await service.set_availability(item_id, availability.available)


@router.put("/{item_id}/reorder", response_model=MenuItemResponse)
async def reorder_menu_item(
    item_id: int,
    reorder: ReorderRequest,
    current_user: User = Depends(get_current_active_user),
    service: MenuItemService = Depends(get_menu_item_service),
):
    """Set an item's position within its category; other items keep theirs"""
    await load_editable_item(item_id, current_user, service)
    return await service.reorder_item(item_id, reorder.new_order)
