"""Template schemas"""

from datetime import datetime
from typing import Optional, Dict, Any
from pydantic import BaseModel, Field


class TemplateCreate(BaseModel):
    """Create template request"""
    name: str = Field(..., min_length=2, max_length=100)
    description: Optional[str] = None
    config: Dict[str, Any] = Field(default_factory=dict)
    preview: Optional[str] = None


class TemplateUpdate(BaseModel):
    """Update template request"""
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    description: Optional[str] = None
    config: Optional[Dict[str, Any]] = None
    preview: Optional[str] = None
    active: Optional[bool] = None


class TemplateSummary(BaseModel):
    id: int
    name: str
    description: Optional[str]

    class Config:
        from_attributes = True


class TemplateResponse(BaseModel):
    """Template response"""
    id: int
    name: str
    description: Optional[str]
    config: Dict[str, Any]
    preview: Optional[str]
    active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
