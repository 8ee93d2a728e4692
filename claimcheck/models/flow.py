"""Flow state value types.

Simple constants containers are used for the tri-state verdict and the
submission lifecycle rather than Enums so that values serialize as-is.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional


class Verdict:
    UNKNOWN = "unknown"
    QUALIFIED = "qualified"
    DISQUALIFIED = "disqualified"


class SubmissionState:
    NOT_SUBMITTED = "not_submitted"
    SUBMITTING = "submitting"
    SUBMITTED = "submitted"
    FAILED = "failed"


@dataclass(frozen=True)
class FlowState:
    cursor: int = 0
    verdict: str = Verdict.UNKNOWN
    terminated: bool = False
    submission_state: str = SubmissionState.NOT_SUBMITTED
    # Advisory token for recoverable, non-field errors (processing_error, submission_failed)
    advisory: Optional[str] = None
    # Index of the question that ended the flow early, if any
    exit_cursor: Optional[int] = None

    def evolve(self, **changes) -> "FlowState":
        return replace(self, **changes)


INITIAL_FLOW_STATE = FlowState()


__all__ = ["Verdict", "SubmissionState", "FlowState", "INITIAL_FLOW_STATE"]
