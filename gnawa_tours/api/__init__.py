"""API router package for the Gnawa Tours site."""
from fastapi import APIRouter

from .routes import bookings, content, dashboard, media, programs, sections, settings

router = APIRouter()
router.include_router(content.router)
router.include_router(bookings.router)
router.include_router(media.router)
router.include_router(programs.router)
router.include_router(sections.router)
router.include_router(bookings.admin_router)
router.include_router(dashboard.router)
router.include_router(settings.router)

__all__ = ["router"]
