from .lesson import LessonResponse, LessonUpdate, LessonUpdateResponse
from .main_responses import HealthResponse
from .order import OrderCreate, OrderLineRequest, OrderLineResponse, OrderResponse

__all__ = [
    "HealthResponse",
    "LessonResponse",
    "LessonUpdate",
    "LessonUpdateResponse",
    "OrderCreate",
    "OrderLineRequest",
    "OrderLineResponse",
    "OrderResponse",
]
