"""Client (restaurant) management"""

from typing import Any, Dict, Optional

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from qrmenu.exceptions import ConflictError, NotFoundError
from qrmenu.models.client import Client
from qrmenu.schemas.client import ClientCreate, ClientUpdate
from qrmenu.services.changes import collect_changes
from qrmenu.services.hierarchy import HierarchyService
from qrmenu.services.pagination import paginate
from qrmenu.services.search import matches_text

logger = structlog.get_logger()


class ClientService:
    def __init__(self, db: AsyncSession):
        self._db = db
        self._hierarchy = HierarchyService(db)

    async def get_client(self, client_id: int) -> Client:
        result = await self._db.execute(
            select(Client)
            .where(Client.id == client_id)
            .options(selectinload(Client.menu))
            .execution_options(populate_existing=True)
        )
        client = result.scalar_one_or_none()
        if client is None:
            raise NotFoundError("Client not found")
        return client

    async def list_clients(
        self,
        page: int,
        page_size: int,
        search: Optional[str] = None,
        client_id: Optional[int] = None,
    ) -> Dict[str, Any]:
        query = select(Client).options(selectinload(Client.menu))
        if client_id is not None:
            query = query.where(Client.id == client_id)
        if search:
            query = query.where(matches_text(search, Client.name, Client.slug))
        query = query.order_by(Client.created_at.desc(), Client.id.desc())
        return await paginate(self._db, query, page, page_size)

    async def _ensure_slug_free(self, slug: str) -> None:
        result = await self._db.execute(select(Client.id).where(Client.slug == slug))
        if result.scalar_one_or_none() is not None:
            raise ConflictError("A client with this slug already exists", code="slug_taken")

    async def _commit(self) -> None:
        try:
            await self._db.commit()
        except IntegrityError:
            await self._db.rollback()
            raise ConflictError("A client with this slug already exists", code="slug_taken")

    async def create_client(self, data: ClientCreate) -> Client:
        await self._ensure_slug_free(data.slug)

        client = Client(**data.model_dump(), active=True)
        self._db.add(client)
        await self._commit()

        logger.info("Client created", client_id=client.id, slug=client.slug)
        return await self.get_client(client.id)

    async def update_client(self, client_id: int, data: ClientUpdate) -> Client:
        client = await self.get_client(client_id)
        changes = collect_changes(
            data,
            nullable=("description", "address", "phone", "logo", "slogan"),
        )

        if changes.get("slug") and changes["slug"] != client.slug:
            await self._ensure_slug_free(changes["slug"])

        for field, value in changes.items():
            setattr(client, field, value)
        await self._commit()

        logger.info("Client updated", client_id=client_id, changes=sorted(changes))
        return await self.get_client(client_id)

    async def delete_client(self, client_id: int) -> None:
        client = await self.get_client(client_id)
        had_menu = client.menu is not None

        await self._hierarchy.delete_client_cascade(client)
        await self._db.commit()

        logger.info("Client deleted", client_id=client_id, had_menu=had_menu)
