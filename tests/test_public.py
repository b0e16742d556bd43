"""Tests for the public storefront"""

import pytest
from httpx import AsyncClient

from qrmenu.models.menu import Category, MenuItem


@pytest.mark.asyncio
async def test_storefront(client: AsyncClient, published_menu, test_menu_items):
    response = await client.get("/public/menu/test-restaurant")

    assert response.status_code == 200
    data = response.json()
    assert data["client"]["name"] == "Test Restaurant"
    assert data["client"]["address"] == "123 Test St"
    assert data["menu"]["name"] == "Main"

    categories = data["menu"]["categories"]
    assert [c["name"] for c in categories] == ["Pizza"]
    assert [i["name"] for i in categories[0]["items"]] == ["Margherita Pizza", "Pepperoni Pizza"]
    assert categories[0]["items"][0]["price_bgn"] == 12.0
    assert categories[0]["items"][0]["price_eur"] == 6.14


@pytest.mark.asyncio
async def test_slug_is_case_insensitive(client: AsyncClient, published_menu):
    response = await client.get("/public/menu/Test-Restaurant")

    assert response.status_code == 200


@pytest.mark.asyncio
async def test_unpublished_menu_is_hidden(client: AsyncClient, test_menu, test_menu_items):
    response = await client.get("/public/menu/test-restaurant")

    assert response.status_code == 404
    assert response.json()["error"] == "menu_not_published"


@pytest.mark.asyncio
async def test_inactive_menu_is_hidden(client: AsyncClient, test_db, published_menu):
    published_menu.active = False
    await test_db.commit()

    response = await client.get("/public/menu/test-restaurant/details")

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_inactive_client_is_hidden(client: AsyncClient, test_db, test_restaurant, published_menu):
    test_restaurant.active = False
    await test_db.commit()

    response = await client.get("/public/menu/test-restaurant")

    assert response.status_code == 404
    assert response.json()["error"] == "not_found"


@pytest.mark.asyncio
async def test_unknown_slug(client: AsyncClient):
    response = await client.get("/public/menu/nowhere")

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_hidden_category_and_item(client: AsyncClient, test_db, test_menu, published_menu, test_menu_items):
    drinks = Category(menu_id=test_menu.id, name="Drinks", order=2, active=False)
    test_db.add(drinks)
    await test_db.flush()
    test_db.add(MenuItem(
        category_id=drinks.id,
        menu_id=test_menu.id,
        name="Lemonade",
        price_bgn=4.00,
        price_eur=2.05,
        tags=[],
        allergens=[],
        addons=[],
        order=1,
        available=True,
    ))
    test_menu_items[1].available = False
    await test_db.commit()

    response = await client.get("/public/menu/test-restaurant")
    categories = response.json()["menu"]["categories"]
    assert [c["name"] for c in categories] == ["Pizza"]
    assert [i["name"] for i in categories[0]["items"]] == ["Margherita Pizza"]

    response = await client.get("/public/menu/test-restaurant/categories")
    assert response.status_code == 200
    assert [(c["name"], c["item_count"]) for c in response.json()] == [("Pizza", 1)]

    response = await client.get(f"/public/menu/test-restaurant/categories/{drinks.id}/items")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_menu_details(client: AsyncClient, published_menu):
    response = await client.get("/public/menu/test-restaurant/details")

    assert response.status_code == 200
    assert response.json() == {"id": published_menu.id, "name": "Main", "template": None}


@pytest.mark.asyncio
async def test_category_items_filters(client: AsyncClient, test_category, published_menu):
    url = f"/public/menu/test-restaurant/categories/{test_category.id}/items"

    response = await client.get(url)
    data = response.json()
    assert data["total"] == 2
    assert data["category"] == "Pizza"

    response = await client.get(url, params={"tags": "vegetarian"})
    assert [i["name"] for i in response.json()["items"]] == ["Margherita Pizza"]

    # every listed tag must match on the storefront
    response = await client.get(url, params={"tags": "vegetarian,spicy"})
    assert response.json()["total"] == 0

    response = await client.get(url, params={"search": "pepperoni"})
    assert [i["name"] for i in response.json()["items"]] == ["Pepperoni Pizza"]


@pytest.mark.asyncio
async def test_query_cannot_widen_visibility(client: AsyncClient, test_db, test_category, published_menu, test_menu_items):
    test_menu_items[0].available = False
    await test_db.commit()

    response = await client.get(
        f"/public/menu/test-restaurant/categories/{test_category.id}/items",
        params={"available": "false"},
    )

    assert [i["name"] for i in response.json()["items"]] == ["Pepperoni Pizza"]


@pytest.mark.asyncio
async def test_category_of_another_menu(client: AsyncClient, published_menu, other_category):
    response = await client.get(
        f"/public/menu/test-restaurant/categories/{other_category.id}/items"
    )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_public_reflects_reorder(
    client: AsyncClient, authenticated_client: AsyncClient, published_menu, test_menu_items
):
    await authenticated_client.put(
        f"/menu-items/{test_menu_items[1].id}/reorder", json={"new_order": 1}
    )

    response = await client.get("/public/menu/test-restaurant")
    items = response.json()["menu"]["categories"][0]["items"]
    assert [i["name"] for i in items] == ["Pepperoni Pizza", "Margherita Pizza"]


@pytest.mark.asyncio
async def test_search_wildcards_are_literal(client: AsyncClient, test_db, test_category, published_menu, test_menu_items):
    test_db.add(
        MenuItem(
            category_id=test_category.id,
            menu_id=test_category.menu_id,
            name="Half_Half Pizza",
            description="100% mozzarella",
            price_bgn=16.00,
            price_eur=8.18,
            order=3,
            available=True,
        )
    )
    await test_db.commit()
    url = f"/public/menu/test-restaurant/categories/{test_category.id}/items"

    response = await client.get(url, params={"search": "%"})
    assert [i["name"] for i in response.json()["items"]] == ["Half_Half Pizza"]

    response = await client.get(url, params={"search": "100%"})
    assert [i["name"] for i in response.json()["items"]] == ["Half_Half Pizza"]

    response = await client.get(url, params={"search": "f_h"})
    assert [i["name"] for i in response.json()["items"]] == ["Half_Half Pizza"]

    response = await client.get(url, params={"search": "pizz%"})
    assert response.json()["total"] == 0
