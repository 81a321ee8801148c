"""
Admin endpoints: the full booking ledger and revenue statistics.
"""

from fastapi import APIRouter, Depends

from courtbook.api.deps import require_role
from courtbook.schemas.booking import Booking
from courtbook.schemas.stats import RevenueSummary
from courtbook.schemas.user import Role
from courtbook.services.engine_factory import BookingEngine, get_engine

router = APIRouter(
    prefix="/admin",
    tags=["Admin"],
    dependencies=[Depends(require_role(Role.ADMIN))],
)


@router.get("/bookings", response_model=list[Booking])
async def list_all_bookings(engine: BookingEngine = Depends(get_engine)):
    """Every booking in every status, newest first."""
    return await engine.bookings.list_all()


@router.get("/stats", response_model=RevenueSummary)
async def revenue_stats(engine: BookingEngine = Depends(get_engine)):
    """Revenue over confirmed bookings, with per-day totals for the last 7 days."""
    return await engine.bookings.revenue_summary()
