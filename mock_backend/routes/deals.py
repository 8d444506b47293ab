"""Deal API routes for the mock backend"""

from fastapi import APIRouter

from ..database import deal_db
from ..models import ApiResponse, ok

router = APIRouter(prefix="/api/deals", tags=["Deals"])


@router.get("/active", response_model=ApiResponse)
async def active_deals():
    """Deals currently running"""
    return ok([d.to_wire() for d in deal_db.active_deals()])


@router.get("/banner", response_model=ApiResponse)
async def banner_deals():
    """Running deals featured on the home banner"""
    return ok([d.to_wire() for d in deal_db.banner_deals()])
