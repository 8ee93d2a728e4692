"""APIRouter registration for the claim qualification service."""

from __future__ import annotations

from fastapi import APIRouter

from claimcheck.routes.sessions import router as sessions_router
from claimcheck.routes.submissions import router as submissions_router

api_router = APIRouter()
api_router.include_router(sessions_router, tags=["Sessions"])
api_router.include_router(submissions_router, tags=["Submissions"])

__all__ = ["api_router"]
