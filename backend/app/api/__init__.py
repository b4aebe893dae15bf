"""
API Router

All endpoints served under /api.
"""

from fastapi import APIRouter

from app.api.endpoints import health, quotes, reference

router = APIRouter()

router.include_router(health.router, tags=["Health"])
router.include_router(quotes.router, tags=["Quotes"])
router.include_router(reference.router, tags=["Reference Data"])
