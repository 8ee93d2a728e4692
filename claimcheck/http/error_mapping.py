"""Central error mapping from domain error codes to problem+json statuses.

Single source of truth; route handlers and exception handlers import from
here instead of hardcoding numbers.
"""

from __future__ import annotations

ERROR_MAP = {
    "VALIDATION_FAILED": {"title": "Invalid Answer", "status": 422},
    "QUESTION_NOT_FOUND": {"title": "Not Found", "status": 404},
    "SESSION_NOT_FOUND": {"title": "Not Found", "status": 404},
    "FLOW_TERMINATED": {"title": "Conflict", "status": 409},
    "FLOW_INCOMPLETE": {"title": "Conflict", "status": 409},
    "FLOW_LOCKED": {"title": "Conflict", "status": 409},
    "SUBMISSION_IN_FLIGHT": {"title": "Conflict", "status": 409},
    "ALREADY_SUBMITTED": {"title": "Conflict", "status": 409},
    "CATALOG_CONFLICT": {"title": "Conflict", "status": 409},
    "SUBMISSION_FAILED": {"title": "Bad Gateway", "status": 502},
    "EVALUATION_FAILED": {"title": "Unprocessable", "status": 422},
}

DEFAULT_ERROR = {"title": "Internal Server Error", "status": 500}


def lookup(code: str) -> dict:
    return ERROR_MAP.get(code, DEFAULT_ERROR)


__all__ = ["ERROR_MAP", "DEFAULT_ERROR", "lookup"]
