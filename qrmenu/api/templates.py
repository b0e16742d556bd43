"""Visual template API endpoints"""

from typing import List

from fastapi import APIRouter, Depends, status

from qrmenu.models.user import User, UserRole
from qrmenu.schemas.common import MessageResponse
from qrmenu.schemas.template import TemplateCreate, TemplateUpdate, TemplateResponse
from qrmenu.services.templates import TemplateService
from qrmenu.api.auth import get_current_active_user, require_role
from qrmenu.api.deps import get_template_service

router = APIRouter()


@router.get("", response_model=List[TemplateResponse])
async def list_templates(
    current_user: User = Depends(get_current_active_user),
    service: TemplateService = Depends(get_template_service),
):
    """List active templates"""
    return await service.list_templates()


@router.get("/{template_id}", response_model=TemplateResponse)
async def get_template(
    template_id: int,
    current_user: User = Depends(get_current_active_user),
    service: TemplateService = Depends(get_template_service),
):
    return await service.get_template(template_id)


@router.post("", response_model=TemplateResponse, status_code=status.HTTP_201_CREATED)
async def create_template(
    template_data: TemplateCreate,
    current_user: User = Depends(require_role(UserRole.SUPER_ADMIN)),
    service: TemplateService = Depends(get_template_service),
):
    """Create a template (SuperAdmin only)"""
    return await service.create_template(template_data)


@router.put("/{template_id}", response_model=TemplateResponse)
async def update_template(
    template_id: int,
    template_data: TemplateUpdate,
    current_user: User = Depends(require_role(UserRole.SUPER_ADMIN)),
    service: TemplateService = Depends(get_template_service),
):
    """Update a template (SuperAdmin only)"""
    return await service.update_template(template_id, template_data)


@router.delete("/{template_id}", response_model=MessageResponse)
async def delete_template(
    template_id: int,
    current_user: User = Depends(require_role(UserRole.SUPER_ADMIN)),
    service: TemplateService = Depends(get_template_service),
):
    """Delete a template; menus using it are left without one"""
    await service.delete_template(template_id)
    return MessageResponse(message="Template deleted")
