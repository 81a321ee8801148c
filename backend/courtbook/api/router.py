"""
Central API router that aggregates all route modules.
"""

from fastapi import APIRouter

from courtbook.api.routes import admin, auth, availability, bookings, coaches, courts, pricing

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(auth.router)
api_router.include_router(courts.router)
api_router.include_router(coaches.router)
api_router.include_router(pricing.router)
api_router.include_router(availability.router)
api_router.include_router(bookings.router)
api_router.include_router(admin.router)
