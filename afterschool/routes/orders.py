# afterschool/routes/orders.py
"""
Order routes

Endpoints:
    POST /orders               → Place an order, reserving lesson spaces
"""

import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException, status

from ..api.dependencies import get_order_service
from ..core.exceptions import DomainException
from ..schemas.order import OrderCreate, OrderResponse
from ..services.order_service import OrderService
from .utils import handle_domain_exception

logger = logging.getLogger(__name__)

router = APIRouter(tags=["orders"])


@router.post(
    "",
    response_model=OrderResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Invalid order, name, phone or not enough spaces"},
        404: {"description": "Lesson not found"},
    },
)
async def create_order(
    payload: Optional[OrderCreate] = Body(None),
    order_service: OrderService = Depends(get_order_service),
) -> OrderResponse:
    """
    Place an order.

    Lines are reserved in request order. If a line fails, lines before it
    keep their reservation and no order is created.
    """
    payload = payload or OrderCreate()
    lines = (
        [line.model_dump() for line in payload.lessons] if payload.lessons is not None else None
    )
    try:
        order = await asyncio.to_thread(
            order_service.place_order,
            payload.name,
            payload.phone,
            lines,
        )
        return OrderResponse(**order.to_dict())
    except DomainException as exc:
        handle_domain_exception(exc)
    except Exception as e:
        logger.error("Error creating order: %s", e, exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to create order"
        )
