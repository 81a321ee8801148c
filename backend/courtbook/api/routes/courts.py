"""
Court catalog endpoints.
"""

from fastapi import APIRouter, Depends

from courtbook.schemas.catalog import Court
from courtbook.services.engine_factory import BookingEngine, get_engine

router = APIRouter(prefix="/courts", tags=["Courts"])


@router.get("/", response_model=list[Court])
async def list_courts(engine: BookingEngine = Depends(get_engine)):
    return engine.catalog.list_courts()
