"""
Pydantic schemas for orders.

Request fields are all optional on purpose: presence, name and phone rules
are checked by OrderService so each failure keeps its own error code.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ._strict_base import StrictModel


class OrderLineRequest(BaseModel):
    id: Optional[str] = Field(None, description="Lesson ID")
    quantity: Optional[int] = Field(None, description="Spaces requested")


class OrderCreate(BaseModel):
    """Body of POST /orders."""

    name: Optional[str] = Field(None, description="Customer name (letters and spaces)")
    phone: Optional[str] = Field(None, description="Customer phone (digits only)")
    lessons: Optional[List[OrderLineRequest]] = Field(None, description="Requested lessons")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Jane Doe",
                "phone": "07123456789",
                "lessons": [{"id": "01K2K8CVN3A55280PFKJD9YHKV", "quantity": 2}],
            }
        }
    )


class OrderLineResponse(StrictModel):
    id: str = Field(..., description="Lesson ID")
    subject: str = Field(..., description="Lesson subject at the time of ordering")
    quantity: int = Field(..., gt=0)


class OrderResponse(StrictModel):
    """A persisted order."""

    id: str = Field(..., description="Order ID (ULID)")
    name: str
    phone: str
    lessons: List[OrderLineResponse]
    created_at: datetime
