"""Order API routes for the mock backend"""

import logging
from fastapi import APIRouter, HTTPException, Query

from storefront.models.order import OrderRequest

from ..database import order_db, InsufficientStock
from ..models import ApiResponse, ok

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/orders", tags=["Orders"])


@router.post("", response_model=ApiResponse, status_code=201)
async def create_order(request: OrderRequest):
    """
    Place a pay-at-pickup order.

    Stock for every line is checked before any of it is reserved, so a
    rejected order leaves the catalog untouched.
    """
    if not request.items:
        raise HTTPException(status_code=400, detail="Order has no items")

    try:
        order = order_db.create_order(request)
    except InsufficientStock as e:
        raise HTTPException(status_code=400, detail=str(e))

    logger.info(f"Order {order.id} created: {len(order.items)} lines, total {order.total_amount}")
    return ok(order.to_wire(), message="Order placed")


@router.get("", response_model=ApiResponse)
async def list_orders(limit: int = Query(50, ge=1, le=100)):
    """List recent orders"""
    return ok([o.to_wire() for o in order_db.list_orders(limit=limit)])


@router.get("/{order_id}", response_model=ApiResponse)
async def get_order(order_id: str):
    """Get order details"""
    order = order_db.get_order(order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return ok(order.to_wire())
