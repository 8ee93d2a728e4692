from __future__ import annotations

import logging
import os
from typing import Callable

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from claimcheck.config import AppConfig, load_config
from claimcheck.db.base import get_engine
from claimcheck.db.migrations_runner import apply_migrations, schema_ready
from claimcheck.http.problem import (
    handle_domain_error,
    handle_http_exception,
    handle_request_validation_error,
    handle_unexpected_error,
)
from claimcheck.http.request_id import RequestIdMiddleware
from claimcheck.logging_setup import configure_logging
from claimcheck.logic.errors import ClaimCheckError
from claimcheck.routes import api_router

logger = logging.getLogger(__name__)

_TRUE_TOKENS = {"1", "true", "yes", "on"}


def _health_check(config: AppConfig) -> Callable[[], dict]:
    def check() -> dict:
        try:
            engine = get_engine(config.database.dsn)
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return {"status": "ok", "db": True}
        except SQLAlchemyError as e:
            logger.error("Health DB check failed", exc_info=True)
            return {"status": "degraded", "db": False, "reason": str(e)}

    return check


def _startup_migrations(config: AppConfig) -> None:
    """Apply SQL migrations when enabled or when the schema is missing."""
    engine = get_engine(config.database.dsn)
    enable_flag = os.getenv("AUTO_APPLY_MIGRATIONS", "").strip().lower() in _TRUE_TOKENS
    if not enable_flag and schema_ready(engine):
        logger.info("DB schema appears ready; skipping migrations at startup")
        return
    applied = apply_migrations(engine)
    logger.info("startup_migrations_applied files=%s", applied)


def create_app(config: AppConfig | None = None) -> FastAPI:
    configure_logging()
    cfg = config or load_config()

    app = FastAPI(title="claimcheck", version="1.0.0")
    app.state.config = cfg
    app.state.clock = None
    app.state.lead_submitter = None

    app.add_exception_handler(ClaimCheckError, handle_domain_error)
    app.add_exception_handler(HTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
    app.add_middleware(RequestIdMiddleware)

    @app.on_event("startup")
    def _apply_migrations() -> None:
        _startup_migrations(cfg)

    app.include_router(api_router, prefix="/api/v1")
    # Test-support router (no prefix) exposes '/__test__/events'
    from claimcheck.routes.test_support import router as test_support_router
    app.include_router(test_support_router)

    health_check = _health_check(cfg)

    @app.get("/health")
    def health():
        return health_check()

    logger.info(
        "app_created accident_window_days=%s treatment_window_days=%s test_mode=%s",
        cfg.qualification.accident_window_days,
        cfg.qualification.treatment_window_days,
        cfg.submission.test_mode,
    )
    return app


# Intentionally do not instantiate the app at import time to prevent side effects.
