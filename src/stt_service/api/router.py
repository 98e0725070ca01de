"""
API router configuration.

Aggregates all endpoint routers under /api.
"""

from fastapi import APIRouter

from .endpoints import health, transcribe

api_router = APIRouter(prefix="/api")

api_router.include_router(health.router)
api_router.include_router(transcribe.router)
