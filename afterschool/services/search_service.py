# afterschool/services/search_service.py
"""
Search Service

Resolves a free-text query into lesson matches. Text matches on subject or
location; a query that is exactly a number also matches price and/or
remaining spaces.

Numeric alternatives are only added when the query is the canonical spelling
of that number, so "100" matches price 100 but "100.0", "1e5", "007" and
"10.5.2" only match as text.
"""

from decimal import Decimal
import logging
import math
from typing import List, Optional

from sqlalchemy.orm import Session

from ..core.constants import INTEGER_COLUMN_MAX, INTEGER_COLUMN_MIN
from ..models.lesson import Lesson
from ..repositories.factory import RepositoryFactory
from ..repositories.lesson_repository import LessonRepository
from .base import BaseService

logger = logging.getLogger(__name__)

# Outside this range numbers only have an exponent spelling
_EXPONENT_THRESHOLD = 1e21
_SMALLEST_PLAIN = 1e-6


def canonical_float(value: float) -> Optional[str]:
    """
    Shortest round-trip spelling of ``value``, or None if it has none.

    Integral values drop the fractional part ("100", not "100.0"). Non-finite
    values return None.

    Values whose shortest spelling needs an exponent (at or above 1e21, or
    below 1e-6) also return None, so queries such as "1e+21" or "1e-7" never
    match a price. Prices are stored with two decimal places and ten digits,
    so no stored price could equal such a value anyway.
    """
    if not math.isfinite(value):
        return None
    if abs(value) >= _EXPONENT_THRESHOLD:
        return None
    if value.is_integer():
        return str(int(value))
    text = repr(value)
    if "e" in text:
        if abs(value) < _SMALLEST_PLAIN:
            return None
        text = format(Decimal(text), "f")
    return text


def parse_exact_float(query: str) -> Optional[float]:
    """Return ``float(query)`` when ``query`` is exactly that number's canonical spelling."""
    try:
        value = float(query)
    except ValueError:
        return None
    return value if canonical_float(value) == query else None


def parse_exact_int(query: str) -> Optional[int]:
    """
    Return ``int(query)`` when ``query`` is exactly that integer's spelling.

    Values outside the range of the INTEGER column return None; no stored
    space count can equal them.
    """
    try:
        value = int(query)
    except ValueError:
        return None
    if str(value) != query:
        return None
    if not INTEGER_COLUMN_MIN <= value <= INTEGER_COLUMN_MAX:
        return None
    return value


class SearchService(BaseService):
    """Multi-field lesson search."""

    def __init__(self, db: Session, lesson_repository: Optional[LessonRepository] = None):
        super().__init__(db)
        self.repository = lesson_repository or RepositoryFactory.create_lesson_repository(db)

    @BaseService.measure_operation("search_lessons")
    def search(self, query: Optional[str]) -> List[Lesson]:
        term = (query or "").strip()
        if not term:
            self.logger.debug("Empty query - returning all lessons")
            return self.repository.get_all()

        price = parse_exact_float(term)
        space = parse_exact_int(term)
        self.logger.info("Search query=%r price_match=%s space_match=%s", term, price, space)

        lessons = self.repository.search(term, price=price, space=space)
        self.logger.info("Search results: %s lessons found", len(lessons))
        return lessons
