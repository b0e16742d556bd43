"""Menu management API endpoints"""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from qrmenu.config import settings
from qrmenu.models.user import User, UserRole
from qrmenu.schemas.common import MessageResponse
from qrmenu.schemas.menu import (
    MenuCreate,
    MenuUpdate,
    MenuResponse,
    MenuDetailResponse,
    MenuListResponse,
    PublicationStatus,
)
from qrmenu.services.menus import MenuService
from qrmenu.api.auth import get_current_active_user, verify_client_access, client_scope
from qrmenu.api.deps import get_menu_service

router = APIRouter()


def require_editor(current_user: User) -> None:
    if not current_user.has_permission(UserRole.CLIENT_ADMIN):
        raise HTTPException(status_code=403, detail="Insufficient permissions")


async def load_editable_menu(menu_id: int, current_user: User, service: MenuService):
    require_editor(current_user)
    menu = await service.get_menu(menu_id)
    verify_client_access(menu.client_id, current_user)
    return menu


@router.get("", response_model=MenuListResponse)
async def list_menus(
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    current_user: User = Depends(get_current_active_user),
    service: MenuService = Depends(get_menu_service),
):
    """List menus visible to the current user"""
    return await service.list_menus(page, page_size, client_id=client_scope(current_user))


@router.post("", response_model=MenuResponse, status_code=status.HTTP_201_CREATED)
async def create_menu(
    menu_data: MenuCreate,
    current_user: User = Depends(get_current_active_user),
    service: MenuService = Depends(get_menu_service),
):
    """Create the menu of a client"""
    require_editor(current_user)
    verify_client_access(menu_data.client_id, current_user)
    return await service.create_menu(menu_data)


@router.get("/{menu_id}", response_model=MenuDetailResponse)
async def get_menu(
    menu_id: int,
    current_user: User = Depends(get_current_active_user),
    service: MenuService = Depends(get_menu_service),
):
    """Get a menu with its categories in display order"""
    detail = await service.get_menu_detail(menu_id)
    menu = detail["menu"]
    verify_client_access(menu.client_id, current_user)

    response = MenuResponse.model_validate(menu).model_dump()
    response.update(
        categories=detail["categories"],
        category_count=detail["category_count"],
        item_count=detail["item_count"],
    )
    return response


@router.put("/{menu_id}", response_model=MenuResponse)
async def update_menu(
    menu_id: int,
    menu_data: MenuUpdate,
    current_user: User = Depends(get_current_active_user),
    service: MenuService = Depends(get_menu_service),
):
    """Update a menu"""
    await load_editable_menu(menu_id, current_user, service)
    return await service.update_menu(menu_id, menu_data)


@router.delete("/{menu_id}", response_model=MessageResponse)
async def delete_menu(
    menu_id: int,
    current_user: User = Depends(get_current_active_user),
    service: MenuService = Depends(get_menu_service),
):
    """Delete a menu with all its categories and items"""
    await load_editable_menu(menu_id, current_user, service)
    await service.delete_menu(menu_id)
    return MessageResponse(message="Menu deleted")


@router.post("/{menu_id}/publish", response_model=PublicationStatus)
async def publish_menu(
    menu_id: int,
    current_user: User = Depends(get_current_active_user),
    service: MenuService = Depends(get_menu_service),
):
    """Make a menu reachable from its QR code"""
    await load_editable_menu(menu_id, current_user, service)
    return await service.publish_menu(menu_id)


@router.post("/{menu_id}/unpublish", response_model=PublicationStatus)
async def unpublish_menu(
    menu_id: int,
    current_user: User = Depends(get_current_active_user),
    service: MenuService = Depends(get_menu_service),
):
    """Hide a menu from the public storefront"""
    await load_editable_menu(menu_id, current_user, service)
    return await service.unpublish_menu(menu_id)
