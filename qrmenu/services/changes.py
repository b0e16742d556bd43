"""Partial update helpers"""

from typing import Any, Dict, Iterable

from pydantic import BaseModel


def collect_changes(data: BaseModel, nullable: Iterable[str] = ()) -> Dict[str, Any]:
    """Fields the client actually sent; explicit nulls only where a column allows them"""
    nullable = set(nullable)
    return {
        field: value
        for field, value in data.model_dump(exclude_unset=True).items()
        if value is not None or field in nullable
    }
