"""Tests for translating store constraint failures"""

import json

import pytest
from sqlalchemy.exc import IntegrityError
from starlette.requests import Request

from qrmenu.exceptions import ConflictError, NotFoundError, translate_integrity_error
from qrmenu.main import integrity_error_handler
from qrmenu.models.client import Client
from qrmenu.models.menu import MenuItem


async def failed_commit(db, entity) -> IntegrityError:
    db.add(entity)
    with pytest.raises(IntegrityError) as exc_info:
        await db.commit()
    await db.rollback()
    return exc_info.value


def orphan_item():
    return MenuItem(
        category_id=9999,
        menu_id=9999,
        name="Orphan",
        price_bgn=1.00,
        price_eur=0.51,
        tags=[],
        allergens=[],
        addons=[],
        order=1,
    )


@pytest.mark.asyncio
async def test_missing_parent_is_not_found(test_db):
    exc = await failed_commit(test_db, orphan_item())

    error = translate_integrity_error(exc)

    assert isinstance(error, NotFoundError)
    assert error.status_code == 404


@pytest.mark.asyncio
async def test_duplicate_slug_is_conflict(test_db, test_restaurant):
    exc = await failed_commit(
        test_db, Client(name="Twin", slug="test-restaurant", social_media={}, active=True)
    )

    error = translate_integrity_error(exc)

    assert isinstance(error, ConflictError)
    assert error.status_code == 409


@pytest.mark.asyncio
async def test_handler_renders_missing_parent(test_db):
    exc = await failed_commit(test_db, orphan_item())
    request = Request({"type": "http", "method": "POST", "path": "/menu-items", "headers": []})

    response = await integrity_error_handler(request, exc)

    assert response.status_code == 404
    assert json.loads(response.body)["error"] == "not_found"
