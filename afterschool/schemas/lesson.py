"""
Pydantic schemas for lessons.

Defines request and response models for the lesson and search endpoints.
"""

from typing import Optional

from pydantic import ConfigDict, Field

from ._strict_base import StrictModel, StrictRequestModel


class LessonResponse(StrictModel):
    """A lesson with its remaining spaces."""

    id: str = Field(..., description="Lesson ID (ULID)")
    subject: str = Field(..., description="Subject taught")
    location: str = Field(..., description="Where the lesson takes place")
    price: float = Field(..., ge=0, description="Price per space")
    space: int = Field(..., ge=0, description="Remaining spaces")
    icon: Optional[str] = Field(None, description="Display icon tag")

    model_config = ConfigDict(
        extra="forbid",
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "01K2K8CVN3A55280PFKJD9YHKV",
                "subject": "Mathematics",
                "location": "London",
                "price": 100,
                "space": 5,
                "icon": "fa-calculator",
            }
        },
    )


class LessonUpdate(StrictRequestModel):
    """Fields a client may merge into a lesson; omitted fields are left unchanged."""

    subject: Optional[str] = Field(None, min_length=1)
    location: Optional[str] = Field(None, min_length=1)
    price: Optional[float] = Field(None, ge=0)
    space: Optional[int] = Field(None, ge=0)
    icon: Optional[str] = None


class LessonUpdateResponse(StrictModel):
    message: str = Field(..., description="Human-readable result")
    lesson: LessonResponse
