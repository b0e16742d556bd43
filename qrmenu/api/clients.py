"""Client (restaurant) management API endpoints"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from qrmenu.config import settings
from qrmenu.models.user import User, UserRole
from qrmenu.schemas.client import ClientCreate, ClientUpdate, ClientResponse, ClientListResponse
from qrmenu.schemas.common import MessageResponse
from qrmenu.services.clients import ClientService
from qrmenu.api.auth import get_current_active_user, require_role, verify_client_access, client_scope
from qrmenu.api.deps import get_client_service

router = APIRouter()


@router.get("", response_model=ClientListResponse)
async def list_clients(
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    search: Optional[str] = None,
    current_user: User = Depends(get_current_active_user),
    service: ClientService = Depends(get_client_service),
):
    """List clients visible to the current user"""
    return await service.list_clients(
        page, page_size, search=search, client_id=client_scope(current_user)
    )


@router.post("", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
async def create_client(
    client_data: ClientCreate,
    current_user: User = Depends(require_role(UserRole.SUPER_ADMIN)),
    service: ClientService = Depends(get_client_service),
):
    """Create a new client (SuperAdmin only)"""
    return await service.create_client(client_data)


@router.get("/{client_id}", response_model=ClientResponse)
async def get_client(
    client_id: int,
    current_user: User = Depends(get_current_active_user),
    service: ClientService = Depends(get_client_service),
):
    """Get client details"""
    verify_client_access(client_id, current_user)
    return await service.get_client(client_id)


@router.put("/{client_id}", response_model=ClientResponse)
async def update_client(
    client_id: int,
    client_data: ClientUpdate,
    current_user: User = Depends(get_current_active_user),
    service: ClientService = Depends(get_client_service),
):
    """Update client"""
    verify_client_access(client_id, current_user)

    if not current_user.has_permission(UserRole.CLIENT_ADMIN):
        raise HTTPException(status_code=403, detail="Insufficient permissions")

    return await service.update_client(client_id, client_data)


@router.delete("/{client_id}", response_model=MessageResponse)
async def delete_client(
    client_id: int,
    current_user: User = Depends(require_role(UserRole.SUPER_ADMIN)),
    service: ClientService = Depends(get_client_service),
):
    """Delete client with its menu, categories and items (SuperAdmin only)"""
    await service.delete_client(client_id)
    return MessageResponse(message="Client deleted")
