"""Shared schemas"""

from pydantic import BaseModel, Field


class ReorderRequest(BaseModel):
    """Move a category or item to a new position"""
    new_order: int = Field(..., ge=1, strict=True)


class MessageResponse(BaseModel):
    """Plain acknowledgement"""
    success: bool = True
    message: str


def two_decimals(value: float) -> float:
    """Reject amounts with more than two decimal places"""
    if value is not None and round(value, 2) != value:
        raise ValueError("must have at most 2 decimal places")
    return value
