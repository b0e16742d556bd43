"""QR codes pointing diners at a client's public menu"""

import asyncio
import io
import time
from pathlib import Path
from typing import Any, Dict, Optional

import qrcode
import structlog
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from qrmenu.config import settings
from qrmenu.exceptions import NotFoundError
from qrmenu.models.client import Client
from qrmenu.models.menu import Menu

logger = structlog.get_logger()


def render_qr_png(url: str) -> bytes:
    """Encode ``url`` as a PNG QR code"""
    qr = qrcode.QRCode(
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=10,
        border=2,
    )
    qr.add_data(url)
    qr.make(fit=True)

    image = qr.make_image(fill_color="black", back_color="white")
    buffer = io.BytesIO()
    image.save(buffer)
    return buffer.getvalue()


def public_menu_url(slug: str) -> str:
    return f"{settings.public_menu_base_url.rstrip('/')}/menu/{slug}"


class QRCodeService:
    def __init__(self, db: AsyncSession, output_dir: Optional[Path] = None):
        self._db = db
        self._output_dir = Path(output_dir or settings.qr_code_dir)

    async def _active_client(self, client_id: int) -> Client:
        result = await self._db.execute(
            select(Client).where(Client.id == client_id, Client.active.is_(True))
        )
        client = result.scalar_one_or_none()
        if client is None:
            raise NotFoundError("Client not found")
        return client

    def _write_png(self, path: Path, png: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(png)

    async def generate(self, client_id: int) -> Dict[str, Any]:
        """Render, store and record a QR code for the client's menu"""
        client = await self._active_client(client_id)
        menu_url = public_menu_url(client.slug)

        png = await asyncio.to_thread(render_qr_png, menu_url)
        file_name = f"qr-{client.slug}-{int(time.time() * 1000)}.png"
        path = self._output_dir / file_name
        await asyncio.to_thread(self._write_png, path, png)

        qr_code_url = f"{settings.qr_code_url_prefix.rstrip('/')}/{file_name}"
        result = await self._db.execute(select(Menu).where(Menu.client_id == client.id))
        menu = result.scalar_one_or_none()
        if menu is not None:
            menu.qr_code = qr_code_url
        try:
            await self._db.commit()
        except SQLAlchemyError:
            await self._db.rollback()
            path.unlink(missing_ok=True)
            logger.error("QR code not recorded, image removed", client_id=client.id, file_name=file_name)
            raise

        logger.info("QR code generated", client_id=client.id, file_name=file_name)
        return {"qr_code_url": qr_code_url, "menu_url": menu_url, "client": client}

    async def get(self, client_id: int) -> Dict[str, Any]:
        client = await self._active_client(client_id)
        result = await self._db.execute(select(Menu).where(Menu.client_id == client.id))
        menu = result.scalar_one_or_none()
        if menu is None or not menu.qr_code:
            raise NotFoundError("QR code not found")
        return {
            "qr_code_url": menu.qr_code,
            "menu_url": public_menu_url(client.slug),
            "client": client,
        }
