# afterschool/repositories/lesson_repository.py
"""
Lesson Repository

Data access for lesson inventory, including the conditional capacity
decrement used by order placement and the multi-field search filter.
"""

import logging
from typing import List, Optional

from sqlalchemy import or_, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import RepositoryException
from ..models.lesson import Lesson
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class LessonRepository(BaseRepository[Lesson]):
    """Repository for lesson records and their remaining spaces."""

    def __init__(self, db: Session):
        """Initialize with Lesson model."""
        super().__init__(db, Lesson)
        self.logger = logging.getLogger(__name__)

    def reserve(self, lesson_id: str, quantity: int) -> Optional[Lesson]:
        """
        Decrement a lesson's spaces by ``quantity`` if enough remain.

        Issued as one ``UPDATE ... WHERE space >= :quantity`` so concurrent
        reservations cannot drive the count below zero. The matched row count
        tells success from failure.

        Returns:
            The refreshed lesson on success, None when the lesson is missing
            or has fewer than ``quantity`` spaces.
        """
        stmt = (
            update(Lesson)
            .where(Lesson.id == lesson_id, Lesson.space >= quantity)
            .values(space=Lesson.space - quantity)
            .execution_options(synchronize_session=False)
        )
        try:
            result = self.db.execute(stmt)
            if result.rowcount != 1:
                return None
            return self.db.get(Lesson, lesson_id, populate_existing=True)
        except SQLAlchemyError as e:
            self.logger.error(f"Error reserving {quantity} spaces on lesson {lesson_id}: {str(e)}")
            raise RepositoryException(f"Failed to reserve lesson spaces: {str(e)}")

    def search(
        self,
        text: str,
        price: Optional[float] = None,
        space: Optional[int] = None,
    ) -> List[Lesson]:
        """
        Find lessons matching any of the given criteria.

        ``text`` is matched as a literal, case-insensitive substring of the
        subject or the location; LIKE wildcards in it are escaped. ``price``
        and ``space`` add exact-match alternatives when given.
        """
        conditions = [
            Lesson.subject.icontains(text, autoescape=True),
            Lesson.location.icontains(text, autoescape=True),
        ]
        if price is not None:
            conditions.append(Lesson.price == price)
        if space is not None:
            conditions.append(Lesson.space == space)

        return self._execute_query(self._build_query().filter(or_(*conditions)))

    def get_by_subject(self, subject: str) -> Optional[Lesson]:
        return self.find_one_by(subject=subject)

    def get_sold_out(self) -> List[Lesson]:
        """Lessons with no spaces left."""
        return self.find_by(space=0)
