"""Menu management"""

from typing import Any, Dict, Optional

import structlog
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from qrmenu.exceptions import ConflictError, NotFoundError
from qrmenu.models.client import Client
from qrmenu.models.menu import Category, Menu, MenuItem
from qrmenu.models.template import Template
from qrmenu.schemas.menu import MenuCreate, MenuUpdate
from qrmenu.services.changes import collect_changes
from qrmenu.services.hierarchy import HierarchyService
from qrmenu.services.ordering import sort_siblings
from qrmenu.services.pagination import paginate
from qrmenu.services.publication import PublicationService

logger = structlog.get_logger()


class MenuService:
    def __init__(self, db: AsyncSession):
        self._db = db
        self._hierarchy = HierarchyService(db)
        self._publication = PublicationService(db)

    async def get_menu(self, menu_id: int) -> Menu:
        result = await self._db.execute(
            select(Menu)
            .where(Menu.id == menu_id)
            .options(
                selectinload(Menu.client),
                selectinload(Menu.template),
                selectinload(Menu.categories),
            )
            .execution_options(populate_existing=True)
        )
        menu = result.scalar_one_or_none()
        if menu is None:
            raise NotFoundError("Menu not found")
        return menu

    async def get_menu_detail(self, menu_id: int) -> Dict[str, Any]:
        """Menu plus its categories in display order and child counts"""
        menu = await self.get_menu(menu_id)
        item_count = (
            await self._db.execute(
                select(func.count(MenuItem.id)).where(MenuItem.menu_id == menu_id)
            )
        ).scalar() or 0

        return {
            "menu": menu,
            "categories": sort_siblings(menu.categories),
            "category_count": len(menu.categories),
            "item_count": item_count,
        }

    async def list_menus(
        self, page: int, page_size: int, client_id: Optional[int] = None
    ) -> Dict[str, Any]:
        query = select(Menu).options(selectinload(Menu.client), selectinload(Menu.template))
        if client_id is not None:
            query = query.where(Menu.client_id == client_id)
        query = query.order_by(Menu.created_at.desc(), Menu.id.desc())
        return await paginate(self._db, query, page, page_size)

    async def _ensure_template(self, template_id: Optional[int]) -> None:
        if template_id is not None and await self._db.get(Template, template_id) is None:
            raise NotFoundError("Template not found")

    async def create_menu(self, data: MenuCreate) -> Menu:
        if await self._db.get(Client, data.client_id) is None:
            raise NotFoundError("Client not found")

        existing = await self._db.execute(select(Menu.id).where(Menu.client_id == data.client_id))
        if existing.scalar_one_or_none() is not None:
            raise ConflictError("This client already has a menu", code="client_has_menu")

        await self._ensure_template(data.template_id)

        menu = Menu(
            name=data.name,
            client_id=data.client_id,
            template_id=data.template_id,
            active=True,
            published=False,
        )
        self._db.add(menu)
        try:
            await self._db.commit()
        except IntegrityError:
            await self._db.rollback()
            raise ConflictError("This client already has a menu", code="client_has_menu")

        logger.info("Menu created", menu_id=menu.id, client_id=menu.client_id)
        return await self.get_menu(menu.id)

    async def update_menu(self, menu_id: int, data: MenuUpdate) -> Menu:
        menu = await self.get_menu(menu_id)
        changes = collect_changes(data, nullable=("template_id",))

        if "template_id" in changes:
            await self._ensure_template(changes["template_id"])

        for field, value in changes.items():
            setattr(menu, field, value)
        await self._db.commit()

        logger.info("Menu updated", menu_id=menu_id, changes=sorted(changes))
        return await self.get_menu(menu_id)

    async def delete_menu(self, menu_id: int) -> None:
        menu = await self.get_menu(menu_id)

        await self._hierarchy.delete_menu_cascade(menu)
        await self._db.commit()

        logger.info("Menu deleted", menu_id=menu_id, client_id=menu.client_id)

    async def publish_menu(self, menu_id: int) -> Menu:
        menu = await self.get_menu(menu_id)
        return await self._publication.publish(menu)

    async def unpublish_menu(self, menu_id: int) -> Menu:
        menu = await self.get_menu(menu_id)
        return await self._publication.unpublish(menu)
