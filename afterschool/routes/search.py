# afterschool/routes/search.py
"""
Search routes

Endpoints:
    GET /search?query=term     → Lessons matching the term
"""

import asyncio
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ..api.dependencies import get_search_service
from ..core.exceptions import DomainException
from ..schemas.lesson import LessonResponse
from ..services.search_service import SearchService
from .utils import handle_domain_exception

logger = logging.getLogger(__name__)

router = APIRouter(tags=["search"])


@router.get("", response_model=List[LessonResponse])
async def search_lessons(
    query: str = Query("", description="Free-text term; matches subject, location, price or space"),
    search_service: SearchService = Depends(get_search_service),
) -> List[LessonResponse]:
    """
    Search lessons dynamically.

    An empty query returns every lesson.
    """
    try:
        lessons = await asyncio.to_thread(search_service.search, query)
        return [LessonResponse.model_validate(lesson) for lesson in lessons]
    except DomainException as exc:
        handle_domain_exception(exc)
    except Exception as e:
        logger.error("Error searching lessons: %s", e, exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to search lessons"
        )
