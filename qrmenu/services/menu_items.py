"""Menu item management"""

from typing import Any, Dict, List, Optional

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from qrmenu.exceptions import NotFoundError
from qrmenu.models.menu import Menu, MenuItem
from qrmenu.schemas.menu_item import MenuItemCreate, MenuItemUpdate
from qrmenu.services.changes import collect_changes
from qrmenu.services.hierarchy import HierarchyService
from qrmenu.services.ordering import OrderingService, sibling_order_by
from qrmenu.services.pagination import paginate
from qrmenu.services.search import matches_text

logger = structlog.get_logger()


def parse_tags(tags: Optional[str]) -> List[str]:
    """Split a comma-separated query value"""
    if not tags:
        return []
    return [tag.strip() for tag in tags.split(",") if tag.strip()]


class MenuItemService:
    def __init__(self, db: AsyncSession):
        self._db = db
        self._hierarchy = HierarchyService(db)
        self._ordering = OrderingService(db)

    async def get_item(self, item_id: int) -> MenuItem:
        result = await self._db.execute(
            select(MenuItem)
            .where(MenuItem.id == item_id)
            .options(selectinload(MenuItem.category), selectinload(MenuItem.menu))
            .execution_options(populate_existing=True)
        )
        item = result.scalar_one_or_none()
        if item is None:
            raise NotFoundError("Menu item not found")
        return item

    async def list_items(
        self,
        page: int,
        page_size: int,
        menu_id: Optional[int] = None,
        category_id: Optional[int] = None,
        available: Optional[bool] = None,
        tags: Optional[str] = None,
        search: Optional[str] = None,
        client_id: Optional[int] = None,
    ) -> Dict[str, Any]:
        query = select(MenuItem).options(
            selectinload(MenuItem.category), selectinload(MenuItem.menu)
        )
        if menu_id is not None:
            query = query.where(MenuItem.menu_id == menu_id)
        if category_id is not None:
            query = query.where(MenuItem.category_id == category_id)
        if available is not None:
            query = query.where(MenuItem.available.is_(available))
        if client_id is not None:
            query = query.join(Menu, MenuItem.menu_id == Menu.id).where(Menu.client_id == client_id)
        if search:
            query = query.where(matches_text(search, MenuItem.name, MenuItem.description))
        query = query.order_by(*sibling_order_by(MenuItem))

        wanted = set(parse_tags(tags))
        if not wanted:
            return await paginate(self._db, query, page, page_size)

        # JSON tag lists are matched in Python so the filter works on every backend
        result = await self._db.execute(query)
        matching = [item for item in result.scalars().all() if wanted & set(item.tags or [])]
        offset = (page - 1) * page_size
        return {
            "items": matching[offset:offset + page_size],
            "total": len(matching),
            "page": page,
            "page_size": page_size,
        }

    async def create_item(self, data: MenuItemCreate) -> MenuItem:
        category = await self._hierarchy.validate_item_parent(data.category_id, data.menu_id)

        order = data.order
        if order is None:
            order = await self._ordering.next_order(MenuItem, category.id)

        item = MenuItem(
            name=data.name,
            description=data.description,
            price_bgn=data.price_bgn,
            price_eur=data.price_eur,
            weight=data.weight,
            weight_unit=data.weight_unit,
            image=data.image,
            tags=data.tags,
            allergens=data.allergens,
            addons=[addon.model_dump() for addon in data.addons],
            order=order,
            available=True,
        )
        self._hierarchy.bind_item_to_category(item, category, data.menu_id)
        self._db.add(item)
        await self._db.commit()

        logger.info(
            "Menu item created",
            item_id=item.id,
            category_id=item.category_id,
            menu_id=item.menu_id,
            order=item.order,
        )
        return await self.get_item(item.id)

    async def update_item(self, item_id: int, data: MenuItemUpdate) -> MenuItem:
        item = await self.get_item(item_id)
        changes = collect_changes(
            data, nullable=("description", "weight", "weight_unit", "image")
        )

        category_id = changes.pop("category_id", None)
        menu_id = changes.pop("menu_id", None)
        if category_id is not None and category_id != item.category_id:
            category = await self._hierarchy.validate_item_parent(category_id, menu_id)
            self._hierarchy.bind_item_to_category(item, category, menu_id)
        elif menu_id is not None:
            category = await self._hierarchy.validate_item_parent(item.category_id, menu_id)
            self._hierarchy.bind_item_to_category(item, category, menu_id)

        for field, value in changes.items():
            setattr(item, field, value)
        await self._db.commit()

        logger.info(
            "Menu item updated",
            item_id=item_id,
            changes=sorted(data.model_dump(exclude_unset=True)),
        )
        return await self.get_item(item_id)

    async def delete_item(self, item_id: int) -> None:
        item = await self.get_item(item_id)

        await self._db.delete(item)
        await self._db.commit()

        logger.info("Menu item deleted", item_id=item_id, category_id=item.category_id)

    async def set_availability(self, item_id: int, available: bool) -> MenuItem:
        item = await self.get_item(item_id)

        item.available = available
        await self._db.commit()

        logger.info("Menu item availability changed", item_id=item_id, available=available)
        return item

    async def reorder_item(self, item_id: int, new_order) -> MenuItem:
        item = await self.get_item(item_id)
        await self._ordering.set_order(item, new_order)
        return await self.get_item(item_id)
