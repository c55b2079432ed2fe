# afterschool/models/order.py
"""
Order models.

An order is written once, after every one of its lines has reserved
capacity, and never changes afterwards. Lines keep a snapshot of the lesson
subject and their position in the original request.
"""

from datetime import datetime, timezone
from typing import Any, Dict

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from ..core.ulid_helper import generate_ulid
from ..database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Order(Base):
    __tablename__ = "orders"

    id = Column(String(26), primary_key=True, index=True, default=generate_ulid)
    name = Column(String(255), nullable=False)
    phone = Column(String(32), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    lines = relationship(
        "OrderLine",
        back_populates="order",
        order_by="OrderLine.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "phone": self.phone,
            "lessons": [line.to_dict() for line in self.lines],
            "created_at": self.created_at,
        }


class OrderLine(Base):
    """One reserved lesson within an order."""

    __tablename__ = "order_lines"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(String(26), ForeignKey("orders.id"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    # Plain reference: lessons are snapshotted, not joined
    lesson_id = Column(String(26), nullable=False, index=True)
    subject = Column(String(255), nullable=False)
    quantity = Column(Integer, nullable=False)

    __table_args__ = (CheckConstraint("quantity > 0", name="ck_order_lines_quantity_positive"),)

    order = relationship("Order", back_populates="lines")

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.lesson_id, "subject": self.subject, "quantity": self.quantity}
