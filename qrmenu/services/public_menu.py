"""Read-only storefront projections, filtered by the publication gate"""

from collections import defaultdict
from typing import Any, Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from qrmenu.exceptions import NotFoundError
from qrmenu.models.client import Client
from qrmenu.models.menu import Category, Menu, MenuItem
from qrmenu.services.menu_items import parse_tags
from qrmenu.services.ordering import sibling_order_by
from qrmenu.services.publication import (
    is_category_visible,
    is_item_visible,
    is_menu_visible,
    visible_category_clause,
    visible_client_clause,
    visible_item_clause,
    visible_menu_clause,
)
from qrmenu.services.search import matches_text


class PublicMenuService:
    def __init__(self, db: AsyncSession):
        self._db = db

    async def get_visible_client(self, slug: str) -> Client:
        result = await self._db.execute(
            select(Client).where(Client.slug == slug.lower(), visible_client_clause())
        )
        client = result.scalar_one_or_none()
        if client is None:
            raise NotFoundError("Restaurant not found or not active")
        return client

    async def get_visible_menu(self, client: Client) -> Menu:
        result = await self._db.execute(
            select(Menu)
            .where(Menu.client_id == client.id, visible_menu_clause())
            .options(selectinload(Menu.template))
            .execution_options(populate_existing=True)
        )
        menu = result.scalar_one_or_none()
        if menu is None or not is_menu_visible(menu, client):
            raise NotFoundError("Menu not available", code="menu_not_published")
        return menu

    async def _visible_categories(self, client: Client, menu: Menu) -> List[Category]:
        result = await self._db.execute(
            select(Category)
            .where(Category.menu_id == menu.id, visible_category_clause())
            .order_by(*sibling_order_by(Category))
        )
        return [c for c in result.scalars().all() if is_category_visible(c, menu, client)]

    def _public_template(self, menu: Menu):
        if menu.template is not None and menu.template.active:
            return menu.template
        return None

    async def get_storefront(self, slug: str) -> Dict[str, Any]:
        """Client profile and the full visible menu tree"""
        client = await self.get_visible_client(slug)
        menu = await self.get_visible_menu(client)
        categories = await self._visible_categories(client, menu)

        by_id = {category.id: category for category in categories}
        items_by_category = defaultdict(list)
        if by_id:
            result = await self._db.execute(
                select(MenuItem)
                .where(
                    MenuItem.menu_id == menu.id,
                    MenuItem.category_id.in_(list(by_id)),
                    visible_item_clause(),
                )
                .order_by(*sibling_order_by(MenuItem))
            )
            for item in result.scalars().all():
                category = by_id[item.category_id]
                if is_item_visible(item, category, menu, client):
                    items_by_category[item.category_id].append(item)

        return {
            "client": client,
            "menu": {
                "id": menu.id,
                "name": menu.name,
                "template": self._public_template(menu),
                "categories": [
                    {
                        "id": category.id,
                        "name": category.name,
                        "description": category.description,
                        "image": category.image,
                        "order": category.order,
                        "items": items_by_category[category.id],
                    }
                    for category in categories
                ],
            },
        }

    async def get_menu_details(self, slug: str) -> Dict[str, Any]:
        client = await self.get_visible_client(slug)
        menu = await self.get_visible_menu(client)
        return {"id": menu.id, "name": menu.name, "template": self._public_template(menu)}

    async def list_categories(self, slug: str) -> List[Dict[str, Any]]:
        """Visible categories with the number of visible items in each"""
        client = await self.get_visible_client(slug)
        menu = await self.get_visible_menu(client)
        categories = await self._visible_categories(client, menu)

        result = await self._db.execute(
            select(MenuItem.category_id, func.count(MenuItem.id))
            .where(MenuItem.menu_id == menu.id, visible_item_clause())
            .group_by(MenuItem.category_id)
        )
        counts = dict(result.all())

        return [
            {
                "id": category.id,
                "name": category.name,
                "description": category.description,
                "image": category.image,
                "order": category.order,
                "item_count": counts.get(category.id, 0),
            }
            for category in categories
        ]

    async def list_category_items(
        self,
        slug: str,
        category_id: int,
        tags: Optional[str] = None,
        search: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Visible items of one visible category; filters only ever narrow"""
        client = await self.get_visible_client(slug)
        menu = await self.get_visible_menu(client)

        result = await self._db.execute(
            select(Category).where(
                Category.id == category_id,
                Category.menu_id == menu.id,
                visible_category_clause(),
            )
        )
        category = result.scalar_one_or_none()
        if category is None:
            raise NotFoundError("Category not found")

        query = (
            select(MenuItem)
            .where(MenuItem.category_id == category.id, visible_item_clause())
            .order_by(*sibling_order_by(MenuItem))
        )
        if search:
            query = query.where(matches_text(search, MenuItem.name, MenuItem.description))
        result = await self._db.execute(query)
        items = [
            item for item in result.scalars().all()
            if is_item_visible(item, category, menu, client)
        ]

        wanted = set(parse_tags(tags))
        if wanted:
            items = [item for item in items if wanted.issubset(item.tags or [])]

        return {"items": items, "total": len(items), "category": category.name}
