"""Domain event constants and publisher.

Defines event type constants and a simple publish() callable used by the
session, evaluation and submission flows.
"""

from __future__ import annotations

from typing import Any, Dict, List
import logging

logger = logging.getLogger(__name__)

SESSION_STARTED = "session.started"
SESSION_RESTARTED = "session.restarted"
QUALIFICATION_EVALUATED = "qualification.evaluated"
LEAD_SUBMITTED = "lead.submitted"
LEAD_SUBMISSION_FAILED = "lead.submission_failed"


# In-memory buffer for domain events (test-only visibility)
EVENT_BUFFER: List[Dict[str, Any]] = []


def publish(event_type: str, payload: Dict[str, Any]) -> None:
    """Publish a domain event.

    Events are logged for observability and buffered for test observation.
    """
    logger.info("event_publish type=%s payload=%s", event_type, payload)
    EVENT_BUFFER.append({"type": event_type, "payload": payload})


def get_buffered_events(clear: bool = True) -> List[Dict[str, Any]]:
    """Return buffered domain events; optionally clear the buffer."""
    events = list(EVENT_BUFFER)
    if clear:
        EVENT_BUFFER.clear()
    return events


__all__ = [
    "SESSION_STARTED",
    "SESSION_RESTARTED",
    "QUALIFICATION_EVALUATED",
    "LEAD_SUBMITTED",
    "LEAD_SUBMISSION_FAILED",
    "publish",
    "get_buffered_events",
    "EVENT_BUFFER",
]
