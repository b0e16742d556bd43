"""Client (restaurant tenant) model"""

from datetime import datetime
from sqlalchemy import Column, String, Integer, Boolean, DateTime, JSON, Text
from sqlalchemy.orm import relationship

from qrmenu.database import Base


class Client(Base):
    """Restaurant tenant, owns at most one menu"""
    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    slug = Column(String(50), unique=True, nullable=False, index=True)  # burger-king
    description = Column(Text)
    address = Column(String(200))
    phone = Column(String(20))
    logo = Column(String(500))
    slogan = Column(String(100))
    social_media = Column(JSON, default=dict)  # {"facebook": ..., "instagram": ..., "website": ...}
    active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    menu = relationship(
        "Menu",
        back_populates="client",
        uselist=False,
        passive_deletes=True,
    )
    users = relationship("User", back_populates="client", passive_deletes=True)
