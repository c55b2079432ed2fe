"""
Database models for the booking API.

- Lesson: inventory item with remaining capacity
- Order / OrderLine: placed orders and their reserved lines
"""

from .lesson import Lesson
from .order import Order, OrderLine

__all__ = ["Lesson", "Order", "OrderLine"]
