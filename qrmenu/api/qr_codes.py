"""QR code API endpoints"""

from fastapi import APIRouter, Depends, HTTPException

from qrmenu.models.user import User, UserRole
from qrmenu.schemas.qr_code import QRCodeResponse
from qrmenu.services.qr_codes import QRCodeService
from qrmenu.api.auth import get_current_active_user, verify_client_access
from qrmenu.api.deps import get_qr_code_service

router = APIRouter()


@router.post("/{client_id}/generate", response_model=QRCodeResponse)
async def generate_qr_code(
    client_id: int,
    current_user: User = Depends(get_current_active_user),
    service: QRCodeService = Depends(get_qr_code_service),
):
    """Render a new QR code for the client's public menu"""
    if not current_user.has_permission(UserRole.CLIENT_ADMIN):
        raise HTTPException(status_code=403, detail="Insufficient permissions")
    verify_client_access(client_id, current_user)
    return await service.generate(client_id)


@router.get("/{client_id}", response_model=QRCodeResponse)
async def get_qr_code(
    client_id: int,
    current_user: User = Depends(get_current_active_user),
    service: QRCodeService = Depends(get_qr_code_service),
):
    """Latest generated QR code of a client"""
    verify_client_access(client_id, current_user)
    return await service.get(client_id)
