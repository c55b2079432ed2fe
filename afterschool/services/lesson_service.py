# afterschool/services/lesson_service.py
"""
Lesson Service

Owns the lesson inventory. Every change to a lesson's remaining spaces goes
through this service; order placement reserves spaces via ``reserve``.
"""

import logging
import math
from numbers import Real
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy.orm import Session

from ..core.constants import INTEGER_COLUMN_MAX, LESSON_UPDATABLE_FIELDS, SAMPLE_LESSONS
from ..core.exceptions import (
    InsufficientCapacityException,
    LessonNotFoundException,
    ValidationException,
)
from ..core.ulid_helper import is_valid_ulid
from ..models.lesson import Lesson
from ..repositories.factory import RepositoryFactory
from ..repositories.lesson_repository import LessonRepository
from .base import BaseService

logger = logging.getLogger(__name__)


class LessonService(BaseService):
    """Inventory ledger for lessons."""

    def __init__(self, db: Session, lesson_repository: Optional[LessonRepository] = None):
        super().__init__(db)
        self.repository = lesson_repository or RepositoryFactory.create_lesson_repository(db)

    @BaseService.measure_operation("list_lessons")
    def list_lessons(self) -> List[Lesson]:
        return self.repository.get_all()

    @BaseService.measure_operation("get_lesson")
    def get_lesson(self, lesson_id: str) -> Lesson:
        if not is_valid_ulid(lesson_id):
            raise LessonNotFoundException(lesson_id)
        lesson = self.repository.get_by_id(lesson_id)
        if lesson is None:
            raise LessonNotFoundException(lesson_id)
        return lesson

    @BaseService.measure_operation("reserve_spaces")
    def reserve(self, lesson_id: str, quantity: int) -> Lesson:
        """
        Take ``quantity`` spaces from a lesson and commit immediately.

        Raises:
            LessonNotFoundException: no lesson with this id
            InsufficientCapacityException: fewer than ``quantity`` spaces remain
        """
        if quantity > INTEGER_COLUMN_MAX:
            # More than any lesson can hold; refuse without touching the store
            current = self.repository.get_by_id(lesson_id)
            if current is None:
                raise LessonNotFoundException(lesson_id)
            raise InsufficientCapacityException(lesson_id, current.subject, quantity)

        with self.transaction():
            lesson = self.repository.reserve(lesson_id, quantity)
            if lesson is None:
                current = self.repository.get_by_id(lesson_id)
                if current is None:
                    raise LessonNotFoundException(lesson_id)
                self.logger.info(
                    "Reservation refused for lesson %s: requested=%s remaining=%s",
                    lesson_id,
                    quantity,
                    current.space,
                )
                raise InsufficientCapacityException(lesson_id, current.subject, quantity)

        self.logger.info(
            "Reserved %s spaces on lesson %s (%s left)", quantity, lesson_id, lesson.space
        )
        return lesson

    @BaseService.measure_operation("update_lesson")
    def update_lesson(self, lesson_id: str, fields: Mapping[str, Any]) -> Lesson:
        """
        Merge ``fields`` into a lesson; fields not mentioned keep their values.

        Raises:
            ValidationException: empty body, unknown field or invalid value
            LessonNotFoundException: no lesson with this id
        """
        updates = self._validate_update_fields(fields)
        if not is_valid_ulid(lesson_id):
            raise LessonNotFoundException(lesson_id)

        with self.transaction():
            lesson = self.repository.update(lesson_id, **updates)
            if lesson is None:
                raise LessonNotFoundException(lesson_id)

        self.log_operation("update_lesson", lesson_id=lesson_id, fields=sorted(updates))
        return lesson

    @BaseService.measure_operation("seed_sample_lessons")
    def seed_sample_lessons(self) -> int:
        """Insert the sample catalogue when no lessons exist. Returns rows inserted."""
        if self.repository.count() > 0:
            return 0

        with self.transaction():
            for data in SAMPLE_LESSONS:
                self.repository.create(**data)

        self.logger.info("Sample lessons data initialized (%s lessons)", len(SAMPLE_LESSONS))
        return len(SAMPLE_LESSONS)

    def restock_sold_out(self, spaces: int) -> List[Lesson]:
        """Give every sold-out lesson ``spaces`` spaces. Returns the lessons changed."""
        self._validate_update_fields({"space": spaces})
        with self.transaction():
            sold_out = self.repository.get_sold_out()
            for lesson in sold_out:
                self.repository.update(lesson.id, space=spaces)
        return sold_out

    def set_space_by_subject(self, subject: str, spaces: int) -> Lesson:
        self._validate_update_fields({"space": spaces})
        lesson = self.repository.get_by_subject(subject)
        if lesson is None:
            raise LessonNotFoundException(subject)
        return self.update_lesson(lesson.id, {"space": spaces})

    def _validate_update_fields(self, fields: Mapping[str, Any]) -> Dict[str, Any]:
        if not fields:
            raise ValidationException("Request body is required", code="INVALID_REQUEST")

        unknown = sorted(set(fields) - LESSON_UPDATABLE_FIELDS)
        if unknown:
            raise ValidationException(
                f"Unknown lesson fields: {', '.join(unknown)}",
                code="INVALID_REQUEST",
                details={"fields": unknown},
            )

        updates = dict(fields)
        if "space" in updates:
            space = updates["space"]
            if (
                isinstance(space, bool)
                or not isinstance(space, int)
                or not 0 <= space <= INTEGER_COLUMN_MAX
            ):
                raise ValidationException(
                    "space must be a non-negative integer", code="INVALID_REQUEST"
                )
        if "price" in updates:
            price = updates["price"]
            if (
                isinstance(price, bool)
                or not isinstance(price, Real)
                or not math.isfinite(price)
                or price < 0
            ):
                raise ValidationException(
                    "price must be a non-negative number", code="INVALID_REQUEST"
                )
        for text_field in ("subject", "location"):
            if text_field in updates:
                value = updates[text_field]
                if not isinstance(value, str) or not value.strip():
                    raise ValidationException(
                        f"{text_field} must be a non-empty string", code="INVALID_REQUEST"
                    )
        if "icon" in updates and updates["icon"] is not None and not isinstance(updates["icon"], str):
            raise ValidationException("icon must be a string", code="INVALID_REQUEST")
        return updates
