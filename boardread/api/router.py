"""Mounts the health, analyze and locations routers under /api."""

from __future__ import annotations

from fastapi import APIRouter

from boardread.api import analyze, health, locations

api_router = APIRouter(prefix="/api")

api_router.include_router(health.router)
api_router.include_router(analyze.router)
api_router.include_router(locations.router)
