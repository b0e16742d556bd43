"""Database models"""

from qrmenu.models.client import Client
from qrmenu.models.template import Template
from qrmenu.models.menu import Menu, Category, MenuItem
from qrmenu.models.user import User, UserRole

__all__ = [
    "Client",
    "Template",
    "Menu",
    "Category",
    "MenuItem",
    "User",
    "UserRole",
]
