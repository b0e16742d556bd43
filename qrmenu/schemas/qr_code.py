"""QR code schemas"""

from pydantic import BaseModel

from qrmenu.schemas.client import ClientSummary


class QRCodeResponse(BaseModel):
    """Stored QR code reference for a client's menu"""
    qr_code_url: str
    menu_url: str
    client: ClientSummary
