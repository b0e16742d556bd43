"""Tests for client management"""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_create_client_lowercases_slug(admin_client: AsyncClient):
    response = await admin_client.post(
        "/clients",
        json={
            "name": "Pizza Place",
            "slug": "Pizza-Place",
            "phone": "+359 888 123 456",
            "social_media": {"instagram": "https://instagram.com/pizzaplace"},
        },
    )

    assert response.status_code == 201
    data = response.json()
    assert data["slug"] == "pizza-place"
    assert data["active"] is True
    assert data["menu"] is None
    assert data["social_media"]["instagram"] == "https://instagram.com/pizzaplace"


@pytest.mark.asyncio
async def test_duplicate_slug(admin_client: AsyncClient, test_restaurant):
    response = await admin_client.post(
        "/clients", json={"name": "Copycat", "slug": "test-restaurant"}
    )

    assert response.status_code == 409
    data = response.json()
    assert data["success"] is False
    assert data["error"] == "slug_taken"


@pytest.mark.asyncio
async def test_invalid_slug(admin_client: AsyncClient):
    response = await admin_client.post("/clients", json={"name": "Bad", "slug": "bad slug!"})

    assert response.status_code == 400
    data = response.json()
    assert data["error"] == "validation_error"
    assert [e["field"] for e in data["errors"]] == ["slug"]


@pytest.mark.asyncio
async def test_client_admin_cannot_create(authenticated_client: AsyncClient):
    response = await authenticated_client.post("/clients", json={"name": "Mine", "slug": "mine"})

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_list_is_scoped(authenticated_client: AsyncClient, test_restaurant, other_restaurant):
    response = await authenticated_client.get("/clients")

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 1
    assert data["items"][0]["slug"] == "test-restaurant"


@pytest.mark.asyncio
async def test_admin_list_search_and_paging(admin_client: AsyncClient, test_restaurant, other_restaurant):
    response = await admin_client.get("/clients", params={"search": "other"})
    assert [c["slug"] for c in response.json()["items"]] == ["other-restaurant"]

    response = await admin_client.get("/clients", params={"search": "%"})
    assert response.json()["total"] == 0

    response = await admin_client.get("/clients", params={"page": 2, "page_size": 1})
    data = response.json()
    assert data["total"] == 2
    assert data["page"] == 2
    assert len(data["items"]) == 1


@pytest.mark.asyncio
async def test_cannot_read_other_client(authenticated_client: AsyncClient, other_restaurant):
    response = await authenticated_client.get(f"/clients/{other_restaurant.id}")

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_get_client_with_menu(authenticated_client: AsyncClient, test_restaurant, test_menu):
    response = await authenticated_client.get(f"/clients/{test_restaurant.id}")

    assert response.status_code == 200
    assert response.json()["menu"] == {
        "id": test_menu.id,
        "name": "Main",
        "active": True,
        "published": False,
    }


@pytest.mark.asyncio
async def test_update_client(authenticated_client: AsyncClient, test_restaurant):
    response = await authenticated_client.put(
        f"/clients/{test_restaurant.id}",
        json={"name": "Renamed Restaurant", "address": None},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Renamed Restaurant"
    assert data["address"] is None
    assert data["slug"] == "test-restaurant"


@pytest.mark.asyncio
async def test_update_slug_conflict(admin_client: AsyncClient, test_restaurant, other_restaurant):
    response = await admin_client.put(
        f"/clients/{test_restaurant.id}", json={"slug": "other-restaurant"}
    )

    assert response.status_code == 409


@pytest.mark.asyncio
async def test_viewer_cannot_update(viewer_client: AsyncClient, test_restaurant):
    response = await viewer_client.put(f"/clients/{test_restaurant.id}", json={"name": "Nope"})

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_get_unknown_client(admin_client: AsyncClient):
    response = await admin_client.get("/clients/9999")

    assert response.status_code == 404
    assert response.json()["error"] == "not_found"
