# afterschool/routes/lessons.py
"""
Lesson routes

Endpoints:
    GET /lessons               → List every lesson
    PUT /lessons/{lesson_id}   → Merge fields into a lesson
"""

import asyncio
import logging
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Path, status

from ..api.dependencies import get_lesson_service
from ..core.exceptions import DomainException
from ..schemas.lesson import LessonResponse, LessonUpdate, LessonUpdateResponse
from ..services.lesson_service import LessonService
from .utils import handle_domain_exception

logger = logging.getLogger(__name__)

router = APIRouter(tags=["lessons"])


@router.get("", response_model=List[LessonResponse])
async def list_lessons(
    lesson_service: LessonService = Depends(get_lesson_service),
) -> List[LessonResponse]:
    """Return all lessons; order is not significant."""
    try:
        lessons = await asyncio.to_thread(lesson_service.list_lessons)
        return [LessonResponse.model_validate(lesson) for lesson in lessons]
    except DomainException as exc:
        handle_domain_exception(exc)
    except Exception as e:
        logger.error("Error fetching lessons: %s", e, exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch lessons"
        )


@router.put(
    "/{lesson_id}",
    response_model=LessonUpdateResponse,
    responses={400: {"description": "Invalid body"}, 404: {"description": "Lesson not found"}},
)
async def update_lesson(
    lesson_id: str = Path(..., description="Lesson ULID"),
    payload: Optional[LessonUpdate] = Body(None),
    lesson_service: LessonService = Depends(get_lesson_service),
) -> LessonUpdateResponse:
    """
    Update lesson availability (space) or any other lesson field.

    Only the fields present in the body change.
    """
    try:
        lesson = await asyncio.to_thread(
            lesson_service.update_lesson,
            lesson_id,
            payload.model_dump(exclude_unset=True) if payload else {},
        )
        return LessonUpdateResponse(
            message="Lesson availability updated successfully",
            lesson=LessonResponse.model_validate(lesson),
        )
    except DomainException as exc:
        handle_domain_exception(exc)
    except Exception as e:
        logger.error("Error updating lesson %s: %s", lesson_id, e, exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update lesson"
        )
