"""Per-request service construction"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from qrmenu.database import get_db
from qrmenu.services.categories import CategoryService
from qrmenu.services.clients import ClientService
from qrmenu.services.hierarchy import HierarchyService
from qrmenu.services.menu_items import MenuItemService
from qrmenu.services.menus import MenuService
from qrmenu.services.public_menu import PublicMenuService
from qrmenu.services.qr_codes import QRCodeService
from qrmenu.services.templates import TemplateService


def get_client_service(db: AsyncSession = Depends(get_db)) -> ClientService:
    return ClientService(db)


def get_menu_service(db: AsyncSession = Depends(get_db)) -> MenuService:
    return MenuService(db)


def get_category_service(db: AsyncSession = Depends(get_db)) -> CategoryService:
    return CategoryService(db)


def get_menu_item_service(db: AsyncSession = Depends(get_db)) -> MenuItemService:
    return MenuItemService(db)


def get_template_service(db: AsyncSession = Depends(get_db)) -> TemplateService:
    return TemplateService(db)


def get_public_menu_service(db: AsyncSession = Depends(get_db)) -> PublicMenuService:
    return PublicMenuService(db)


def get_qr_code_service(db: AsyncSession = Depends(get_db)) -> QRCodeService:
    return QRCodeService(db)


def get_hierarchy_service(db: AsyncSession = Depends(get_db)) -> HierarchyService:
    return HierarchyService(db)
