"""Service layer: business rules on top of the repositories."""

from .base import BaseService
from .lesson_service import LessonService
from .order_service import OrderService
from .search_service import SearchService

__all__ = ["BaseService", "LessonService", "OrderService", "SearchService"]
