"""Menu-related models"""

from datetime import datetime
from sqlalchemy import (
    Column,
    String,
    Integer,
    Boolean,
    DateTime,
    ForeignKey,
    JSON,
    Numeric,
    Text,
    Index,
)
from sqlalchemy.orm import relationship

from qrmenu.database import Base


class Menu(Base):
    """A client's menu"""
    __tablename__ = "menus"

    id = Column(Integer, primary_key=True, autoincrement=True)
    client_id = Column(
        Integer,
        ForeignKey("clients.id", ondelete="CASCADE"),
        unique=True,  # one menu per client
        nullable=False,
    )
    template_id = Column(Integer, ForeignKey("templates.id", ondelete="SET NULL"))
    name = Column(String(100), nullable=False)
    active = Column(Boolean, default=True, nullable=False)
    published = Column(Boolean, default=False, nullable=False)
    qr_code = Column(String(500))  # URL of the generated QR image
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    client = relationship("Client", back_populates="menu")
    template = relationship("Template", back_populates="menus")
    categories = relationship("Category", back_populates="menu", passive_deletes=True)
    items = relationship("MenuItem", back_populates="menu", passive_deletes=True)


class Category(Base):
    """Ordered grouping of items within a menu"""
    __tablename__ = "categories"
    __table_args__ = (Index("ix_categories_menu_order", "menu_id", "order"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    menu_id = Column(Integer, ForeignKey("menus.id", ondelete="CASCADE"), nullable=False)
    name = Column(String(50), nullable=False)
    description = Column(Text)
    image = Column(String(500))
    order = Column(Integer, default=0, nullable=False)  # presentation hint, not unique
    active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    menu = relationship("Menu", back_populates="categories")
    items = relationship("MenuItem", back_populates="category", passive_deletes=True)


class MenuItem(Base):
    """Priced product within a category"""
    __tablename__ = "menu_items"
    __table_args__ = (
        Index("ix_menu_items_category_order", "category_id", "order"),
        Index("ix_menu_items_menu_id", "menu_id"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="CASCADE"), nullable=False)
    # Denormalized copy of category.menu_id, kept in sync by the hierarchy service
    menu_id = Column(Integer, ForeignKey("menus.id", ondelete="CASCADE"), nullable=False)
    name = Column(String(100), nullable=False)
    description = Column(Text)
    price_bgn = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    price_eur = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    weight = Column(Numeric(10, 2, asdecimal=False))
    weight_unit = Column(String(5))  # g, ml
    image = Column(String(500))
    tags = Column(JSON, default=list)  # ["local", "vegan", ...]
    allergens = Column(JSON, default=list)  # ["gluten", "dairy", ...]
    addons = Column(JSON, default=list)  # [{"name": "Extra cheese", "price": 1.5}, ...]
    order = Column(Integer, default=0, nullable=False)
    available = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    category = relationship("Category", back_populates="items")
    menu = relationship("Menu", back_populates="items")
