"""Category management"""

from typing import Any, Dict, List, Optional

import structlog
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from qrmenu.exceptions import NotFoundError
from qrmenu.models.menu import Category, Menu, MenuItem
from qrmenu.schemas.category import CategoryCreate, CategoryUpdate
from qrmenu.services.changes import collect_changes
from qrmenu.services.hierarchy import HierarchyService
from qrmenu.services.ordering import OrderingService, sibling_order_by, sort_siblings
from qrmenu.services.pagination import paginate

logger = structlog.get_logger()


class CategoryService:
    def __init__(self, db: AsyncSession):
        self._db = db
        self._hierarchy = HierarchyService(db)
        self._ordering = OrderingService(db)

    async def get_category(self, category_id: int, with_items: bool = False) -> Category:
        options = [selectinload(Category.menu)]
        if with_items:
            options.append(selectinload(Category.items))
        result = await self._db.execute(
            select(Category)
            .where(Category.id == category_id)
            .options(*options)
            .execution_options(populate_existing=True)
        )
        category = result.scalar_one_or_none()
        if category is None:
            raise NotFoundError("Category not found")
        return category

    async def get_category_detail(self, category_id: int) -> Dict[str, Any]:
        category = await self.get_category(category_id, with_items=True)
        return {"category": category, "items": sort_siblings(category.items)}

    async def list_categories(
        self,
        page: int,
        page_size: int,
        menu_id: Optional[int] = None,
        client_id: Optional[int] = None,
    ) -> Dict[str, Any]:
        query = select(Category).options(selectinload(Category.menu))
        if menu_id is not None:
            query = query.where(Category.menu_id == menu_id)
        if client_id is not None:
            query = query.join(Menu, Category.menu_id == Menu.id).where(Menu.client_id == client_id)
        query = query.order_by(*sibling_order_by(Category))
        return await paginate(self._db, query, page, page_size)

    async def list_for_reorder(self, menu_id: int) -> List[Dict[str, Any]]:
        """All categories of a menu in display order, with item counts"""
        await self._hierarchy.validate_category_parent(menu_id)

        item_counts = (
            select(MenuItem.category_id, func.count(MenuItem.id).label("item_count"))
            .group_by(MenuItem.category_id)
            .subquery()
        )
        result = await self._db.execute(
            select(Category, func.coalesce(item_counts.c.item_count, 0))
            .outerjoin(item_counts, item_counts.c.category_id == Category.id)
            .where(Category.menu_id == menu_id)
            .order_by(*sibling_order_by(Category))
        )
        return [
            {
                "id": category.id,
                "name": category.name,
                "order": category.order,
                "active": category.active,
                "item_count": item_count,
            }
            for category, item_count in result.all()
        ]

    async def create_category(self, data: CategoryCreate) -> Category:
        menu = await self._hierarchy.validate_category_parent(data.menu_id)

        order = data.order
        if order is None:
            order = await self._ordering.next_order(Category, menu.id)

        category = Category(
            name=data.name,
            description=data.description,
            image=data.image,
            order=order,
            menu_id=menu.id,
            active=True,
        )
        self._db.add(category)
        await self._db.commit()

        logger.info(
            "Category created",
            category_id=category.id,
            menu_id=menu.id,
            order=category.order,
        )
        return await self.get_category(category.id)

    async def update_category(self, category_id: int, data: CategoryUpdate) -> Category:
        category = await self.get_category(category_id)
        changes = collect_changes(data, nullable=("description", "image"))

        moved = "menu_id" in changes and changes["menu_id"] != category.menu_id
        if moved:
            await self._hierarchy.validate_category_parent(changes["menu_id"])

        for field, value in changes.items():
            setattr(category, field, value)

        if moved:
            await self._db.flush()
            await self._hierarchy.sync_item_menu_ids(category)

        await self._db.commit()

        logger.info("Category updated", category_id=category_id, changes=sorted(changes))
        return await self.get_category(category_id)

    async def delete_category(self, category_id: int) -> None:
        category = await self.get_category(category_id)

        await self._hierarchy.delete_category_cascade(category)
        await self._db.commit()

        logger.info("Category deleted", category_id=category_id, menu_id=category.menu_id)

    async def reorder_category(self, category_id: int, new_order) -> Category:
        category = await self.get_category(category_id)
        await self._ordering.set_order(category, new_order)
        return await self.get_category(category_id)
