"""Visual template management"""

from typing import Sequence

import structlog
from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from qrmenu.exceptions import NotFoundError
from qrmenu.models.menu import Menu
from qrmenu.models.template import Template
from qrmenu.schemas.template import TemplateCreate, TemplateUpdate
from qrmenu.services.changes import collect_changes

logger = structlog.get_logger()


class TemplateService:
    def __init__(self, db: AsyncSession):
        self._db = db

    async def list_templates(self, include_inactive: bool = False) -> Sequence[Template]:
        query = select(Template).order_by(Template.name)
        if not include_inactive:
            query = query.where(Template.active.is_(True))
        result = await self._db.execute(query)
        return result.scalars().all()

    async def get_template(self, template_id: int, active_only: bool = False) -> Template:
        template = await self._db.get(Template, template_id)
        if template is None or (active_only and not template.active):
            raise NotFoundError("Template not found")
        return template

    async def create_template(self, data: TemplateCreate) -> Template:
        template = Template(**data.model_dump(), active=True)
        self._db.add(template)
        await self._db.commit()

        logger.info("Template created", template_id=template.id, name=template.name)
        return template

    async def update_template(self, template_id: int, data: TemplateUpdate) -> Template:
        template = await self.get_template(template_id)
        changes = collect_changes(data, nullable=("description", "preview"))

        for field, value in changes.items():
            setattr(template, field, value)
        await self._db.commit()

        logger.info("Template updated", template_id=template_id, changes=sorted(changes))
        return template

    async def delete_template(self, template_id: int) -> None:
        """Delete a template; menus using it fall back to no template"""
        template = await self.get_template(template_id)

        await self._db.execute(
            update(Menu)
            .where(Menu.template_id == template_id)
            .values(template_id=None)
            .execution_options(synchronize_session="fetch")
        )
        await self._db.execute(delete(Template).where(Template.id == template.id))
        await self._db.commit()

        logger.info("Template deleted", template_id=template_id)
