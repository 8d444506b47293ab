"""Wishlist API routes for the mock backend"""

from typing import Optional
from fastapi import APIRouter, Header, HTTPException, Query

from ..database import wishlist_db
from ..models import ApiResponse, ok

router = APIRouter(prefix="/api/wishlist", tags=["Wishlist"])


def require_token(authorization: Optional[str]) -> None:
    """Wishlist calls need an 'Authorization: jwt <token>' header"""
    if not authorization or not authorization.startswith("jwt "):
        raise HTTPException(status_code=401, detail="Please log in to use your wishlist")


@router.get("", response_model=ApiResponse)
async def get_wishlist(
    populate: Optional[str] = Query(None, description="Comma separated relations to expand"),
    authorization: Optional[str] = Header(None),
):
    """Products on the wishlist"""
    require_token(authorization)
    return ok([p.to_wire() for p in wishlist_db.items()])


@router.post("/{product_id}", response_model=ApiResponse)
async def add_to_wishlist(product_id: str, authorization: Optional[str] = Header(None)):
    """Add a product to the wishlist"""
    require_token(authorization)
    if not wishlist_db.add(product_id):
        raise HTTPException(status_code=404, detail="Product not found")
    return ok([p.to_wire() for p in wishlist_db.items()], message="Added to wishlist")


@router.delete("/{product_id}", response_model=ApiResponse)
async def remove_from_wishlist(product_id: str, authorization: Optional[str] = Header(None)):
    """Remove a product from the wishlist"""
    require_token(authorization)
    wishlist_db.remove(product_id)
    return ok([p.to_wire() for p in wishlist_db.items()], message="Removed from wishlist")
