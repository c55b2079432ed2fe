"""Repository layer: all data access goes through these classes."""

from .base_repository import BaseRepository
from .factory import RepositoryFactory
from .lesson_repository import LessonRepository
from .order_repository import OrderRepository

__all__ = [
    "BaseRepository",
    "LessonRepository",
    "OrderRepository",
    "RepositoryFactory",
]
