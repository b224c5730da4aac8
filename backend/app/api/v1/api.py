# File: backend/app/api/v1/api.py
# Version: v0.8.0
"""
v1 API aggregator.

Routers included under /api:
- health
- profile (biophysical window profile, comparison, window reports)
"""
from __future__ import annotations

from fastapi import APIRouter

from . import health as health_router
from . import profile as profile_router

api_router = APIRouter()
api_router.include_router(health_router.router)
api_router.include_router(profile_router.router)
