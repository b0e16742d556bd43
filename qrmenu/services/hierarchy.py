"""
Parent-child integrity for client -> menu -> category -> item.

Menu items carry a denormalized ``menu_id`` that must always equal their
category's ``menu_id``. Every mutation path that could move an item or a
category goes through this service.
"""

from typing import Optional

import structlog
from sqlalchemy import delete, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from qrmenu.exceptions import HierarchyMismatchError, NotFoundError
from qrmenu.models.client import Client
from qrmenu.models.menu import Category, Menu, MenuItem
from qrmenu.models.user import User

logger = structlog.get_logger()


class HierarchyService:
    """Validates parents and performs cascading deletes"""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def validate_category_parent(self, menu_id: int) -> Menu:
        """Target menu of a category create/move must exist"""
        menu = await self._db.get(Menu, menu_id)
        if menu is None:
            raise NotFoundError("Menu not found")
        return menu

    async def validate_item_parent(
        self, category_id: int, menu_id: Optional[int] = None
    ) -> Category:
        """Target category must exist and, if a menu is named, belong to it"""
        category = await self._db.get(Category, category_id)
        if category is None:
            raise NotFoundError("Category not found")

        if menu_id is not None and menu_id != category.menu_id:
            logger.warning(
                "Category/menu mismatch",
                category_id=category_id,
                category_menu_id=category.menu_id,
                requested_menu_id=menu_id,
            )
            raise HierarchyMismatchError("Category does not belong to the specified menu")

        return category

    async def client_id_for_menu(self, menu_id: int) -> int:
        """Owning client of a menu, for access checks"""
        menu = await self.validate_category_parent(menu_id)
        return menu.client_id

    async def client_id_for_category(self, category_id: int) -> int:
        category = await self.validate_item_parent(category_id)
        return await self.client_id_for_menu(category.menu_id)

    def bind_item_to_category(
        self, item: MenuItem, category: Category, menu_id: Optional[int] = None
    ) -> MenuItem:
        """Attach an item to a category, deriving its menu_id from it"""
        if menu_id is not None and menu_id != category.menu_id:
            raise HierarchyMismatchError("Category does not belong to the specified menu")
        item.category_id = category.id
        item.menu_id = category.menu_id
        return item

    async def sync_item_menu_ids(self, category: Category) -> None:
        """Rewrite the denormalized menu_id of every item in a moved category"""
        await self._db.execute(
            update(MenuItem)
            .where(MenuItem.category_id == category.id)
            .values(menu_id=category.menu_id)
            .execution_options(synchronize_session="fetch")
        )

    # ------------------------------------------------------------------
    # Cascading deletes
    # ------------------------------------------------------------------

    async def delete_category_cascade(self, category: Category) -> None:
        category_id = category.id
        await self._db.execute(delete(MenuItem).where(MenuItem.category_id == category_id))
        await self._db.execute(delete(Category).where(Category.id == category_id))

    async def delete_menu_cascade(self, menu: Menu) -> None:
        menu_id = menu.id
        category_ids = select(Category.id).where(Category.menu_id == menu_id)
        await self._db.execute(
            delete(MenuItem).where(
                or_(MenuItem.menu_id == menu_id, MenuItem.category_id.in_(category_ids))
            )
        )
        await self._db.execute(delete(Category).where(Category.menu_id == menu_id))
        await self._db.execute(delete(Menu).where(Menu.id == menu_id))

    async def delete_client_cascade(self, client: Client) -> None:
        client_id = client.id
        result = await self._db.execute(select(Menu).where(Menu.client_id == client_id))
        menu = result.scalar_one_or_none()
        if menu is not None:
            await self.delete_menu_cascade(menu)
        await self._db.execute(delete(User).where(User.client_id == client_id))
        await self._db.execute(delete(Client).where(Client.id == client_id))
