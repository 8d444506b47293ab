"""Product API routes for the mock backend"""

from typing import Optional
from fastapi import APIRouter, HTTPException, Query

from ..database import product_db
from ..models import ApiResponse, ok

router = APIRouter(prefix="/api/products", tags=["Products"])


@router.get("", response_model=ApiResponse)
async def list_products(
    category: Optional[str] = Query(None, description="Filter by category id"),
):
    """List the catalog"""
    products = product_db.list_products(category=category)
    return ok([p.to_wire() for p in products])


@router.get("/{product_id}", response_model=ApiResponse)
async def get_product(product_id: str):
    """Get a product by ID"""
    product = product_db.get_product(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return ok(product.to_wire())


@router.get("/{product_id}/related", response_model=ApiResponse)
async def get_related_products(
    product_id: str,
    limit: int = Query(4, ge=1, le=20),
):
    """Products from the same category"""
    if not product_db.get_product(product_id):
        raise HTTPException(status_code=404, detail="Product not found")
    return ok([p.to_wire() for p in product_db.related_products(product_id, limit=limit)])
