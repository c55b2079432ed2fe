# afterschool/api/dependencies/services.py
"""
Service layer dependencies for dependency injection.

Each request gets services bound to its own database session; the engine
and session factory behind ``get_db`` are created once per process.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from ...database import get_db
from ...services.lesson_service import LessonService
from ...services.order_service import OrderService
from ...services.search_service import SearchService


def get_lesson_service(db: Session = Depends(get_db)) -> LessonService:
    """Get lesson inventory service instance."""
    return LessonService(db)


def get_search_service(db: Session = Depends(get_db)) -> SearchService:
    """Get lesson search service instance."""
    return SearchService(db)


def get_order_service(db: Session = Depends(get_db)) -> OrderService:
    """Get order placement service instance."""
    return OrderService(db, lesson_service=LessonService(db))
