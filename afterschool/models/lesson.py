# afterschool/models/lesson.py
"""
Lesson model.

A lesson is an inventory item: a subject taught at a location, with a price
and a number of remaining spaces. Spaces are only ever decreased by order
placement, through a conditional update in LessonRepository.reserve.
"""

from typing import Any, Dict

from sqlalchemy import CheckConstraint, Column, Integer, Numeric, String

from ..core.ulid_helper import generate_ulid
from ..database import Base


class Lesson(Base):
    """Bookable after-school lesson with its remaining capacity."""

    __tablename__ = "lessons"

    id = Column(String(26), primary_key=True, index=True, default=generate_ulid)
    subject = Column(String(255), nullable=False, index=True)
    location = Column(String(255), nullable=False, index=True)
    price = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    space = Column(Integer, nullable=False, default=0)
    icon = Column(String(100), nullable=True)

    __table_args__ = (
        CheckConstraint("space >= 0", name="ck_lessons_space_non_negative"),
        CheckConstraint("price >= 0", name="ck_lessons_price_non_negative"),
    )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "subject": self.subject,
            "location": self.location,
            "price": self.price,
            "space": self.space,
            "icon": self.icon,
        }

    def __repr__(self) -> str:
        return f"<Lesson {self.id} {self.subject!r} @ {self.location!r} space={self.space}>"
