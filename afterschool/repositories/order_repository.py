# afterschool/repositories/order_repository.py
"""
Order Repository

Persists placed orders together with their lines.
"""

from datetime import datetime
import logging
from typing import Any, Dict, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session, selectinload

from ..core.exceptions import RepositoryException
from ..models.order import Order, OrderLine
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class OrderRepository(BaseRepository[Order]):
    def __init__(self, db: Session):
        super().__init__(db, Order)
        self.logger = logging.getLogger(__name__)

    def create_with_lines(
        self,
        *,
        name: str,
        phone: str,
        lines: List[Dict[str, Any]],
        created_at: datetime,
    ) -> Order:
        """
        Insert an order and its lines in request order.

        Each entry of ``lines`` carries ``lesson_id``, ``subject`` and
        ``quantity``. Does NOT commit.
        """
        try:
            order = Order(name=name, phone=phone, created_at=created_at)
            order.lines = [
                OrderLine(
                    position=position,
                    lesson_id=line["lesson_id"],
                    subject=line["subject"],
                    quantity=line["quantity"],
                )
                for position, line in enumerate(lines)
            ]
            self.db.add(order)
            self.db.flush()
            return order
        except SQLAlchemyError as e:
            self.logger.error(f"Error creating order for {name}: {str(e)}")
            self.db.rollback()
            raise RepositoryException(f"Failed to create Order: {str(e)}")

    def _apply_eager_loading(self, query: Query) -> Query:
        return query.options(selectinload(Order.lines))
