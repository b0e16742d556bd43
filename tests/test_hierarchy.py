"""Tests for parent-child consistency and cascading deletes"""

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select

from qrmenu.exceptions import HierarchyMismatchError, NotFoundError
from qrmenu.models.client import Client
from qrmenu.models.menu import Menu, Category, MenuItem
from qrmenu.models.user import User
from qrmenu.schemas.category import CategoryUpdate
from qrmenu.services.categories import CategoryService
from qrmenu.services.hierarchy import HierarchyService


async def count(db, model, *criteria):
    result = await db.execute(select(func.count()).select_from(model).where(*criteria))
    return result.scalar()


@pytest.mark.asyncio
async def test_validate_category_parent_unknown_menu(test_db):
    with pytest.raises(NotFoundError):
        await HierarchyService(test_db).validate_category_parent(9999)


@pytest.mark.asyncio
async def test_validate_item_parent(test_db, test_menu, test_category, other_menu):
    hierarchy = HierarchyService(test_db)

    category = await hierarchy.validate_item_parent(test_category.id, test_menu.id)
    assert category.id == test_category.id

    with pytest.raises(HierarchyMismatchError) as exc_info:
        await hierarchy.validate_item_parent(test_category.id, other_menu.id)
    assert exc_info.value.code == "hierarchy_mismatch"

    with pytest.raises(NotFoundError):
        await hierarchy.validate_item_parent(9999, test_menu.id)


@pytest.mark.asyncio
async def test_item_create_rejects_foreign_menu(
    test_db, admin_client: AsyncClient, test_category, other_menu
):
    """A category/menu mismatch is rejected and nothing is written"""
    before = await count(test_db, MenuItem)

    response = await admin_client.post(
        "/menu-items",
        json={
            "name": "Sneaky Roll",
            "category_id": test_category.id,
            "menu_id": other_menu.id,
            "price_bgn": 10.00,
            "price_eur": 5.11,
        },
    )

    assert response.status_code == 400
    data = response.json()
    assert data["error"] == "hierarchy_mismatch"
    assert await count(test_db, MenuItem) == before


@pytest.mark.asyncio
async def test_item_create_unknown_category(admin_client: AsyncClient, test_menu):
    response = await admin_client.post(
        "/menu-items",
        json={
            "name": "Ghost",
            "category_id": 9999,
            "menu_id": test_menu.id,
            "price_bgn": 1.00,
            "price_eur": 0.51,
        },
    )

    assert response.status_code == 404
    assert response.json()["error"] == "not_found"


@pytest.mark.asyncio
async def test_item_update_rejects_foreign_menu(
    admin_client: AsyncClient, test_menu, test_menu_items, other_menu
):
    item = test_menu_items[0]

    response = await admin_client.put(f"/menu-items/{item.id}", json={"menu_id": other_menu.id})

    assert response.status_code == 400
    assert response.json()["error"] == "hierarchy_mismatch"

    response = await admin_client.get(f"/menu-items/{item.id}")
    assert response.json()["menu_id"] == test_menu.id


@pytest.mark.asyncio
async def test_item_move_to_other_category_derives_menu(
    admin_client: AsyncClient, test_menu_items, other_menu, other_category
):
    item = test_menu_items[0]

    response = await admin_client.put(
        f"/menu-items/{item.id}", json={"category_id": other_category.id}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["category_id"] == other_category.id
    assert data["menu_id"] == other_menu.id


@pytest.mark.asyncio
async def test_category_move_resyncs_items(test_db, test_category, test_menu_items, other_menu):
    service = CategoryService(test_db)

    moved = await service.update_category(test_category.id, CategoryUpdate(menu_id=other_menu.id))

    assert moved.menu_id == other_menu.id
    result = await test_db.execute(
        select(MenuItem.menu_id).where(MenuItem.category_id == test_category.id)
    )
    assert set(result.scalars().all()) == {other_menu.id}


@pytest.mark.asyncio
async def test_category_move_to_unknown_menu(test_db, test_category, test_menu):
    with pytest.raises(NotFoundError):
        await CategoryService(test_db).update_category(
            test_category.id, CategoryUpdate(menu_id=9999)
        )
    assert test_category.menu_id == test_menu.id


@pytest.mark.asyncio
async def test_delete_category_cascades(test_db, admin_client: AsyncClient, test_category, test_menu_items):
    response = await admin_client.delete(f"/categories/{test_category.id}")

    assert response.status_code == 200
    assert await count(test_db, Category, Category.id == test_category.id) == 0
    assert await count(test_db, MenuItem, MenuItem.category_id == test_category.id) == 0


@pytest.mark.asyncio
async def test_delete_menu_cascades(test_db, admin_client: AsyncClient, test_menu, test_menu_items):
    response = await admin_client.delete(f"/menus/{test_menu.id}")

    assert response.status_code == 200
    assert await count(test_db, Menu, Menu.id == test_menu.id) == 0
    assert await count(test_db, Category, Category.menu_id == test_menu.id) == 0
    assert await count(test_db, MenuItem, MenuItem.menu_id == test_menu.id) == 0

    response = await admin_client.get(f"/menus/{test_menu.id}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_client_cascades(
    test_db, admin_client: AsyncClient, test_restaurant, test_menu, test_menu_items, test_user, other_restaurant
):
    response = await admin_client.delete(f"/clients/{test_restaurant.id}")

    assert response.status_code == 200
    assert await count(test_db, Client, Client.id == test_restaurant.id) == 0
    assert await count(test_db, Menu, Menu.client_id == test_restaurant.id) == 0
    assert await count(test_db, MenuItem, MenuItem.menu_id == test_menu.id) == 0
    assert await count(test_db, User, User.client_id == test_restaurant.id) == 0

    # the other restaurant is untouched
    assert await count(test_db, Menu, Menu.client_id == other_restaurant.id) == 1


@pytest.mark.asyncio
async def test_delete_menu_removes_every_child(test_db, admin_client: AsyncClient, test_menu, test_category, test_menu_items):
    drinks = Category(menu_id=test_menu.id, name="Drinks", order=2)
    test_db.add(drinks)
    await test_db.flush()
    for name in ("Water", "Lemonade", "Beer"):
        test_db.add(MenuItem(
            category_id=drinks.id,
            menu_id=test_menu.id,
            name=name,
            price_bgn=3.00,
            price_eur=1.53,
            tags=[],
            allergens=[],
            addons=[],
            order=1,
        ))
    await test_db.commit()
    assert await count(test_db, MenuItem, MenuItem.menu_id == test_menu.id) == 5

    response = await admin_client.delete(f"/menus/{test_menu.id}")

    assert response.status_code == 200
    assert await count(test_db, Category, Category.menu_id == test_menu.id) == 0
    assert await count(test_db, MenuItem, MenuItem.menu_id == test_menu.id) == 0
    assert await count(test_db, MenuItem, MenuItem.category_id.in_([test_category.id, drinks.id])) == 0
