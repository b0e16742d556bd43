"""
Sibling ordering for categories (within a menu) and items (within a category).

The ``order`` column is a presentation hint, not a permutation: duplicates
and gaps are allowed. Listings are made deterministic by sorting on
``order ASC, created_at DESC`` with ``id DESC`` as the last resort.
"""

from typing import Iterable, List, Sequence, Type, Union

import structlog
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from qrmenu.exceptions import ValidationError
from qrmenu.models.menu import Category, MenuItem

logger = structlog.get_logger()

Sibling = Union[Category, MenuItem]


def parent_column(model: Type[Sibling]):
    """Column holding the parent id that defines a sibling group"""
    if model is Category:
        return Category.menu_id
    if model is MenuItem:
        return MenuItem.category_id
    raise TypeError(f"{model!r} has no sibling ordering")


def sibling_order_by(model: Type[Sibling]) -> tuple:
    """ORDER BY clause for listing siblings"""
    return (model.order.asc(), model.created_at.desc(), model.id.desc())


def sort_siblings(entities: Iterable[Sibling]) -> List[Sibling]:
    """Sort siblings in memory with the same rule as ``sibling_order_by``"""
    # Python's sort is stable, so sort by the tie-break first
    newest_first = sorted(entities, key=lambda e: (e.created_at, e.id), reverse=True)
    return sorted(newest_first, key=lambda e: e.order)


def validate_new_order(new_order) -> int:
    if isinstance(new_order, bool) or not isinstance(new_order, int) or new_order < 1:
        raise ValidationError(
            "New position must be a positive integer",
            code="invalid_order",
        )
    return new_order


class OrderingService:
    """Assigns and updates sibling positions"""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def next_order(self, model: Type[Sibling], parent_id: int) -> int:
        """Position after the last sibling, or 1 for the first child"""
        result = await self._db.execute(
            select(func.max(model.order)).where(parent_column(model) == parent_id)
        )
        current_max = result.scalar()
        return (current_max or 0) + 1

    async def list_siblings(self, model: Type[Sibling], parent_id: int) -> Sequence[Sibling]:
        result = await self._db.execute(
            select(model)
            .where(parent_column(model) == parent_id)
            .order_by(*sibling_order_by(model))
        )
        return result.scalars().all()

    async def set_order(self, entity: Sibling, new_order) -> Sibling:
        """Overwrite one entity's position; siblings are never shifted.

        Setting the current position again is a successful no-op.
        """
        new_order = validate_new_order(new_order)

        if entity.order == new_order:
            logger.info(
                "Order unchanged",
                entity=type(entity).__name__,
                entity_id=entity.id,
                order=new_order,
            )
            return entity

        old_order = entity.order
        entity.order = new_order
        await self._db.commit()

        logger.info(
            "Order changed",
            entity=type(entity).__name__,
            entity_id=entity.id,
            old_order=old_order,
            new_order=new_order,
        )
        return entity
