"""Маршруты HTTP API."""
from fastapi import APIRouter

from .routes_reports import router as reports_router

router = APIRouter()
router.include_router(reports_router)

__all__ = ["router"]
