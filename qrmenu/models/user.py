"""User model for admin authentication"""

from datetime import datetime
from sqlalchemy import Column, String, Integer, Boolean, DateTime, ForeignKey, Enum
from sqlalchemy.orm import relationship
import enum

from qrmenu.database import Base


class UserRole(str, enum.Enum):
    """User roles for RBAC"""
    SUPER_ADMIN = "super_admin"
    CLIENT_ADMIN = "client_admin"
    CLIENT_VIEWER = "client_viewer"


class User(Base):
    """Admin surface users"""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # Null for super admins, set for users scoped to one restaurant
    client_id = Column(Integer, ForeignKey("clients.id", ondelete="CASCADE"))

    # Authentication
    email = Column(String(255), unique=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)

    # Profile
    name = Column(String(255))

    # Role
    role = Column(Enum(UserRole), default=UserRole.CLIENT_VIEWER, nullable=False)

    # Status
    is_active = Column(Boolean, default=True)

    # Tokens
    refresh_token = Column(String(500))

    # Timestamps
    last_login = Column(DateTime)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    client = relationship("Client", back_populates="users")

    def has_permission(self, required_role: UserRole) -> bool:
        """Check if user has at least the required role level"""
        role_hierarchy = {
            UserRole.CLIENT_VIEWER: 1,
            UserRole.CLIENT_ADMIN: 2,
            UserRole.SUPER_ADMIN: 3,
        }
        return role_hierarchy.get(self.role, 0) >= role_hierarchy.get(required_role, 0)
