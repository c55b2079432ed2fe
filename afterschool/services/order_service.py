# afterschool/services/order_service.py
"""
Order Service

Places orders against the lesson inventory.

Flow for ``place_order``:
1. Request shape (name, phone, non-empty lines with positive quantities)
2. Name pattern, then phone pattern
3. Per line, in request order: look the lesson up, reserve spaces
4. Persist the order with its resolved lines

Each reservation commits on its own. When a later line fails, spaces taken
by earlier lines of the same request stay taken and no order is written.
"""

from datetime import datetime, timezone
import logging
import re
from typing import Any, Dict, List, Mapping, Optional, Sequence

from sqlalchemy.orm import Session

from ..core.constants import NAME_PATTERN, PHONE_PATTERN
from ..core.exceptions import (
    InvalidNameException,
    InvalidPhoneException,
    InvalidRequestException,
)
from ..models.order import Order
from ..repositories.factory import RepositoryFactory
from ..repositories.order_repository import OrderRepository
from .base import BaseService
from .lesson_service import LessonService

logger = logging.getLogger(__name__)

_NAME_RE = re.compile(NAME_PATTERN)
_PHONE_RE = re.compile(PHONE_PATTERN, re.ASCII)


class OrderService(BaseService):
    """Validates order requests and reserves lesson spaces line by line."""

    def __init__(
        self,
        db: Session,
        lesson_service: Optional[LessonService] = None,
        order_repository: Optional[OrderRepository] = None,
    ):
        super().__init__(db)
        self.lesson_service = lesson_service or LessonService(db)
        self.repository = order_repository or RepositoryFactory.create_order_repository(db)

    @BaseService.measure_operation("place_order")
    def place_order(
        self,
        name: Any,
        phone: Any,
        lines: Any,
    ) -> Order:
        """
        Validate, reserve and persist an order.

        Args:
            name: Customer name, letters and whitespace only
            phone: Customer phone, digits only
            lines: Sequence of ``{"id": lesson_id, "quantity": n}`` mappings

        Returns:
            The persisted order with its lines

        Raises:
            InvalidRequestException: missing fields, empty or malformed lines
            InvalidNameException: name fails the letters-only rule
            InvalidPhoneException: phone fails the digits-only rule
            LessonNotFoundException: a line references an unknown lesson
            InsufficientCapacityException: a line asks for more spaces than remain
            ServiceException: the store failed
        """
        requested = self._validate_request(name, phone, lines)
        if not _NAME_RE.fullmatch(name):
            raise InvalidNameException(name)
        if not _PHONE_RE.fullmatch(phone):
            raise InvalidPhoneException(phone)

        resolved: List[Dict[str, Any]] = []
        for lesson_id, quantity in requested:
            lesson = self.lesson_service.get_lesson(lesson_id)
            # TODO: reservations from earlier lines are not released when a later
            # line fails; decide whether the whole order should be one transaction.
            reserved = self.lesson_service.reserve(lesson.id, quantity)
            resolved.append(
                {"lesson_id": reserved.id, "subject": reserved.subject, "quantity": quantity}
            )

        with self.transaction():
            order = self.repository.create_with_lines(
                name=name,
                phone=phone,
                lines=resolved,
                created_at=datetime.now(timezone.utc),
            )

        self.log_operation("place_order", order_id=order.id, lines=len(resolved))
        return order

    @BaseService.measure_operation("list_orders")
    def list_orders(self) -> List[Order]:
        return self.repository.get_all()

    @staticmethod
    def _validate_request(name: Any, phone: Any, lines: Any) -> List[tuple[str, int]]:
        if not name or not isinstance(name, str):
            raise InvalidRequestException()
        if not phone or not isinstance(phone, str):
            raise InvalidRequestException()
        if not lines or isinstance(lines, (str, bytes, Mapping)) or not isinstance(lines, Sequence):
            raise InvalidRequestException()

        requested: List[tuple[str, int]] = []
        for index, line in enumerate(lines):
            if not isinstance(line, Mapping):
                raise InvalidRequestException(details={"line": index})
            lesson_id = line.get("id")
            quantity = line.get("quantity")
            if not lesson_id or not isinstance(lesson_id, str):
                raise InvalidRequestException(
                    "Order line is missing a lesson id", details={"line": index}
                )
            if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
                raise InvalidRequestException(
                    "Order line quantity must be a positive integer", details={"line": index}
                )
            requested.append((lesson_id, quantity))
        return requested
