"""Visual template model"""

from datetime import datetime
from sqlalchemy import Column, String, Integer, Boolean, DateTime, JSON, Text
from sqlalchemy.orm import relationship

from qrmenu.database import Base


class Template(Base):
    """Named visual configuration attachable to a menu"""
    __tablename__ = "templates"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    description = Column(Text)
    # {"colors": {"primary": ..., "secondary": ..., "background": ..., "text": ...},
    #  "fonts": {"heading": ..., "body": ...}, "layout": "grid" | "list" | "cards"}
    config = Column(JSON, default=dict)
    preview = Column(String(500))
    active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    menus = relationship("Menu", back_populates="template")
