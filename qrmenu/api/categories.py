"""Category management API endpoints"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from qrmenu.config import settings
from qrmenu.models.user import User, UserRole
from qrmenu.schemas.category import (
    CategoryCreate,
    CategoryUpdate,
    CategoryResponse,
    CategoryDetailResponse,
    CategoryListResponse,
    CategoryReorderEntry,
)
from qrmenu.schemas.common import MessageResponse, ReorderRequest
from qrmenu.services.categories import CategoryService
from qrmenu.services.hierarchy import HierarchyService
from qrmenu.api.auth import get_current_active_user, verify_client_access, client_scope
from qrmenu.api.deps import get_category_service, get_hierarchy_service

router = APIRouter()


def require_editor(current_user: User) -> None:
    if not current_user.has_permission(UserRole.CLIENT_ADMIN):
        raise HTTPException(status_code=403, detail="Insufficient permissions")


async def load_category(category_id: int, current_user: User, service: CategoryService):
    category = await service.get_category(category_id)
    verify_client_access(category.menu.client_id, current_user)
    return category


@router.get("", response_model=CategoryListResponse)
async def list_categories(
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    menu_id: Optional[int] = None,
    current_user: User = Depends(get_current_active_user),
    service: CategoryService = Depends(get_category_service),
):
    """List categories in display order"""
    return await service.list_categories(
        page, page_size, menu_id=menu_id, client_id=client_scope(current_user)
    )


@router.get("/reorder/{menu_id}", response_model=List[CategoryReorderEntry])
async def list_categories_for_reorder(
    menu_id: int,
    current_user: User = Depends(get_current_active_user),
    service: CategoryService = Depends(get_category_service),
    hierarchy: HierarchyService = Depends(get_hierarchy_service),
):
    """All categories of a menu with their positions, for the reorder screen"""
    verify_client_access(await hierarchy.client_id_for_menu(menu_id), current_user)
    return await service.list_for_reorder(menu_id)


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    category_data: CategoryCreate,
    current_user: User = Depends(get_current_active_user),
    service: CategoryService = Depends(get_category_service),
    hierarchy: HierarchyService = Depends(get_hierarchy_service),
):
    """Create a category; it goes after the last one unless an order is given"""
    require_editor(current_user)
    verify_client_access(await hierarchy.client_id_for_menu(category_data.menu_id), current_user)
    return await service.create_category(category_data)


@router.get("/{category_id}", response_model=CategoryDetailResponse)
async def get_category(
    category_id: int,
    current_user: User = Depends(get_current_active_user),
    service: CategoryService = Depends(get_category_service),
):
    """Get a category with all of its items in display order"""
    detail = await service.get_category_detail(category_id)
    category = detail["category"]
    verify_client_access(category.menu.client_id, current_user)

    response = CategoryResponse.model_validate(category).model_dump()
    response["items"] = detail["items"]
    return response


@router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: int,
    category_data: CategoryUpdate,
    current_user: User = Depends(get_current_active_user),
    service: CategoryService = Depends(get_category_service),
    hierarchy: HierarchyService = Depends(get_hierarchy_service),
):
    """Update a category, optionally moving it to another menu"""
    require_editor(current_user)
    await load_category(category_id, current_user, service)
    if category_data.menu_id is not None:
        verify_client_access(await hierarchy.client_id_for_menu(category_data.menu_id), current_user)
    return await service.update_category(category_id, category_data)


@router.delete("/{category_id}", response_model=MessageResponse)
async def delete_category(
    category_id: int,
    current_user: User = Depends(get_current_active_user),
    service: CategoryService = Depends(get_category_service),
):
    """Delete a category and all of its items"""
    require_editor(current_user)
    await load_category(category_id, current_user, service)
    await service.delete_category(category_id)
    return MessageResponse(message="Category deleted")


@router.put("/{category_id}/reorder", response_model=CategoryResponse)
async def reorder_category(
    category_id: int,
    reorder: ReorderRequest,
    current_user: User = Depends(get_current_active_user),
    service: CategoryService = Depends(get_category_service),
):
    """Set a category's position; other categories keep theirs"""
    require_editor(current_user)
    await load_category(category_id, current_user, service)
    return await service.reorder_category(category_id, reorder.new_order)
