"""Shared FastAPI dependencies.

Configuration, clock and lead submitter are resolved from `app.state` so
tests and hosting environments can swap them without patching modules.
"""

from __future__ import annotations

from datetime import date
from typing import Callable

from fastapi import Request

from claimcheck.config import AppConfig, get_config
from claimcheck.logic.submission import DatabaseLeadSubmitter, LeadSubmitter


def get_app_config(request: Request) -> AppConfig:
    cfg = getattr(request.app.state, "config", None)
    return cfg if cfg is not None else get_config()


def get_clock(request: Request) -> Callable[[], date]:
    return getattr(request.app.state, "clock", None) or date.today


def get_lead_submitter(request: Request) -> LeadSubmitter:
    submitter = getattr(request.app.state, "lead_submitter", None)
    return submitter if submitter is not None else DatabaseLeadSubmitter()


__all__ = ["get_app_config", "get_clock", "get_lead_submitter"]
