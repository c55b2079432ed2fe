"""FastAPI dependency providers."""

from .services import get_lesson_service, get_order_service, get_search_service

__all__ = ["get_lesson_service", "get_order_service", "get_search_service"]
