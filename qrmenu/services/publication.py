"""
Publication gate: what the public storefront may show.

Visibility composes by AND down the containment chain and is evaluated at
read time only. Flipping an ancestor flag hides every descendant without
touching descendant rows. The admin surface ignores the gate.
"""

import structlog
from sqlalchemy import and_, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from qrmenu.exceptions import ValidationError
from qrmenu.models.client import Client
from qrmenu.models.menu import Category, Menu, MenuItem

logger = structlog.get_logger()


def is_client_visible(client: Client) -> bool:
    return bool(client.active)


def is_menu_visible(menu: Menu, client: Client) -> bool:
    return is_client_visible(client) and bool(menu.published) and bool(menu.active)


def is_category_visible(category: Category, menu: Menu, client: Client) -> bool:
    return is_menu_visible(menu, client) and bool(category.active)


def is_item_visible(item: MenuItem, category: Category, menu: Menu, client: Client) -> bool:
    return is_category_visible(category, menu, client) and bool(item.available)


# SQL counterparts of the predicates above, for public read queries

def visible_client_clause():
    return Client.active.is_(True)


def visible_menu_clause():
    return and_(Menu.published.is_(True), Menu.active.is_(True))


def visible_category_clause():
    return Category.active.is_(True)


def visible_item_clause():
    return MenuItem.available.is_(True)


class PublicationService:
    """Draft <-> published transitions of a menu"""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def count_active_categories(self, menu_id: int) -> int:
        result = await self._db.execute(
            select(func.count(Category.id)).where(
                Category.menu_id == menu_id, visible_category_clause()
            )
        )
        return result.scalar() or 0

    async def count_available_items(self, menu_id: int) -> int:
        """Available items whose category is active"""
        result = await self._db.execute(
            select(func.count(MenuItem.id))
            .join(Category, MenuItem.category_id == Category.id)
            .where(
                MenuItem.menu_id == menu_id,
                visible_category_clause(),
                visible_item_clause(),
            )
        )
        return result.scalar() or 0

    async def check_publishable(self, menu: Menu) -> None:
        """Raise a ValidationError naming the first missing precondition"""
        if await self.count_active_categories(menu.id) == 0:
            raise ValidationError(
                "Menu must have at least one active category before it can be published",
                code="menu_has_no_categories",
            )
        if await self.count_available_items(menu.id) == 0:
            raise ValidationError(
                "Menu must have at least one available item before it can be published",
                code="menu_has_no_items",
            )

    async def publish(self, menu: Menu) -> Menu:
        await self.check_publishable(menu)

        menu.published = True
        menu.active = True
        await self._db.commit()

        logger.info("Menu published", menu_id=menu.id, menu_name=menu.name)
        return menu

    async def unpublish(self, menu: Menu) -> Menu:
        """Always permitted"""
        menu.published = False
        await self._db.commit()

        logger.info("Menu unpublished", menu_id=menu.id, menu_name=menu.name)
        return menu
