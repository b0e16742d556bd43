"""Tests for QR code generation"""

import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from qrmenu.models.menu import Menu
from qrmenu.services.qr_codes import QRCodeService, render_qr_png, public_menu_url


def test_render_qr_png():
    png = render_qr_png("http://localhost:3000/menu/test-restaurant")

    assert png.startswith(b"\x89PNG\r\n\x1a\n")


def test_public_menu_url():
    assert public_menu_url("pizza-place") == "http://localhost:3000/menu/pizza-place"


@pytest.mark.asyncio
async def test_generate_and_get(authenticated_client: AsyncClient, test_restaurant, test_menu, tmp_path):
    response = await authenticated_client.get(f"/qr-codes/{test_restaurant.id}")
    assert response.status_code == 404

    response = await authenticated_client.post(f"/qr-codes/{test_restaurant.id}/generate")
    assert response.status_code == 200
    data = response.json()
    assert data["menu_url"] == "http://localhost:3000/menu/test-restaurant"
    assert data["qr_code_url"].startswith("/uploads/qr-codes/qr-test-restaurant-")
    assert data["client"]["slug"] == "test-restaurant"

    file_name = data["qr_code_url"].rsplit("/", 1)[-1]
    assert (tmp_path / "qr-codes" / file_name).read_bytes().startswith(b"\x89PNG")

    response = await authenticated_client.get(f"/qr-codes/{test_restaurant.id}")
    assert response.status_code == 200
    assert response.json()["qr_code_url"] == data["qr_code_url"]

    response = await authenticated_client.get(f"/menus/{test_menu.id}")
    assert response.json()["qr_code"] == data["qr_code_url"]


@pytest.mark.asyncio
async def test_generate_for_other_client(authenticated_client: AsyncClient, other_restaurant):
    response = await authenticated_client.post(f"/qr-codes/{other_restaurant.id}/generate")

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_generate_for_unknown_client(admin_client: AsyncClient):
    response = await admin_client.post("/qr-codes/9999/generate")

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_generate_removes_image_when_commit_fails(test_db, test_restaurant, test_menu, tmp_path, monkeypatch):
    menu_id = test_menu.id
    output_dir = tmp_path / "qr-codes"

    async def failing_commit():
        raise OperationalError("UPDATE menus", {}, Exception("database is locked"))

    monkeypatch.setattr(test_db, "commit", failing_commit)

    with pytest.raises(OperationalError):
        await QRCodeService(test_db, output_dir=output_dir).generate(test_restaurant.id)

    assert list(output_dir.glob("*.png")) == []
    result = await test_db.execute(select(Menu.qr_code).where(Menu.id == menu_id))
    assert result.scalar_one() is None
