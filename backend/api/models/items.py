"""
Pydantic models for /api/items endpoints.

Endpoints:
- GET /api/items - List the caller's items
- POST /api/items - Create an item
- GET /api/items/<item_id> - Fetch one item
"""

from typing import Optional
from uuid import UUID

from pydantic import Field

from .base import BaseBodyModel, BaseParamsModel


class CreateItemBody(BaseBodyModel):
    """Body for POST /api/items."""
    name: str = Field(..., min_length=1, description="Item name")
    description: Optional[str] = Field(None, description="Free-text description")
    price: float = Field(..., ge=0, description="Unit price")


class ListItemsQuery(BaseParamsModel):
    """Query for GET /api/items."""
    limit: Optional[int] = Field(None, ge=1, le=100, description="Max items to return")


class ItemParams(BaseParamsModel):
    """Route params for GET /api/items/<item_id>."""
    item_id: UUID = Field(..., description="Item id")
