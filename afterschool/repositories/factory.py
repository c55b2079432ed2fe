# afterschool/repositories/factory.py
"""
Repository Factory

Provides centralized creation of repository instances,
ensuring consistent initialization and dependency injection.
"""

from sqlalchemy.orm import Session

from .lesson_repository import LessonRepository
from .order_repository import OrderRepository


class RepositoryFactory:
    """Factory class for creating repository instances."""

    @staticmethod
    def create_lesson_repository(db: Session) -> LessonRepository:
        """Create repository for lesson inventory operations."""
        return LessonRepository(db)

    @staticmethod
    def create_order_repository(db: Session) -> OrderRepository:
        """Create repository for order persistence."""
        return OrderRepository(db)
