"""FastAPI application package for the claim qualification service.

This package exposes a small FastAPI application factory around the
questionnaire engine. Engine logic lives in `claimcheck/logic/` and route
handlers in `claimcheck/routes/`.
"""

from __future__ import annotations

from claimcheck.main import create_app

__all__ = ["create_app"]
