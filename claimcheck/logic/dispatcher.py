"""Result dispatch.

Chooses which terminal view to expose from the verdict and the submission
state. Copy for each view lives here so the display layer only renders.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from claimcheck.logic.qualification import ADVISORY_PROCESSING_ERROR, PROCESSING_ERROR_MESSAGE
from claimcheck.models.flow import FlowState, SubmissionState, Verdict


class ResultAction:
    SHOW_QUESTION = "show_question"
    SHOW_DISQUALIFIED = "show_disqualified"
    PRESENT_CONTACT_CAPTURE = "present_contact_capture"
    SHOW_BUSY = "show_busy"
    SHOW_CONFIRMATION = "show_confirmation"
    SHOW_RETRYABLE_ERROR = "show_retryable_error"


ADVISORY_SUBMISSION_FAILED = "submission_failed"
SUBMISSION_FAILED_MESSAGE = "We couldn't send your information. Please try again."

QUALIFIED_MESSAGE = (
    "Based on your responses, we'd like to learn more about your situation. Please provide "
    "your contact information below so we can discuss how we might be able to help."
)
DISQUALIFIED_MESSAGE = (
    "Thank you for submitting your information! We're reviewing your responses and will reach "
    "out if additional information is needed or if we have resources to assist you further."
)
CONFIRMATION_MESSAGE = (
    "Your information has been successfully received. Our legal team will reach out shortly "
    "to discuss the next steps for your case."
)
BUSY_MESSAGE = "Submitting your information..."

RESOURCES: Tuple[Tuple[str, str], ...] = (
    ("What to Do After a Car Accident Checklist", "/resources/after-accident-checklist"),
    ("Understanding Insurance Claims Process", "/resources/understanding-insurance-claims"),
    ("Common Car Accident Injuries and Treatment Options", "/resources/common-injuries"),
)

NEXT_STEPS: Tuple[str, ...] = (
    "A case specialist will review your information within 24 hours.",
    "We'll contact you via your preferred method to discuss your case in detail.",
    "Our team will explain your options and recommend the best path forward.",
)


@dataclass(frozen=True)
class ResultView:
    action: str
    title: Optional[str] = None
    message: Optional[str] = None
    advisory: Optional[str] = None
    advisory_message: Optional[str] = None
    allow_contact: bool = False
    simplified_contact: bool = False
    allow_restart: bool = False
    allow_retry: bool = False
    resources: List[dict] = field(default_factory=list)
    next_steps: List[str] = field(default_factory=list)


def _advisory_message(advisory: Optional[str]) -> Optional[str]:
    if advisory == ADVISORY_PROCESSING_ERROR:
        return PROCESSING_ERROR_MESSAGE
    if advisory == ADVISORY_SUBMISSION_FAILED:
        return SUBMISSION_FAILED_MESSAGE
    return None


def dispatch(state: FlowState) -> ResultView:
    """Map (verdict, submission state) to the view the display should show.

    | verdict       | submission    | action                  |
    |---------------|---------------|-------------------------|
    | (not ended)   | -             | show_question           |
    | any           | submitted     | show_confirmation       |
    | any           | submitting    | show_busy               |
    | any           | failed        | show_retryable_error    |
    | disqualified  | not_submitted | show_disqualified       |
    | qualified     | not_submitted | present_contact_capture |
    """
    if not state.terminated or state.verdict == Verdict.UNKNOWN:
        return ResultView(action=ResultAction.SHOW_QUESTION)

    advisory = state.advisory
    sub = state.submission_state
    simplified = state.verdict == Verdict.DISQUALIFIED

    if sub == SubmissionState.SUBMITTED:
        return ResultView(
            action=ResultAction.SHOW_CONFIRMATION,
            title="Thank You!",
            message=CONFIRMATION_MESSAGE,
            allow_restart=True,
            next_steps=list(NEXT_STEPS),
        )
    if sub == SubmissionState.SUBMITTING:
        return ResultView(action=ResultAction.SHOW_BUSY, message=BUSY_MESSAGE)
    if sub == SubmissionState.FAILED:
        return ResultView(
            action=ResultAction.SHOW_RETRYABLE_ERROR,
            title="Something went wrong",
            advisory=advisory,
            advisory_message=_advisory_message(advisory) or SUBMISSION_FAILED_MESSAGE,
            allow_contact=True,
            simplified_contact=simplified,
            allow_retry=True,
        )
    if state.verdict == Verdict.DISQUALIFIED:
        return ResultView(
            action=ResultAction.SHOW_DISQUALIFIED,
            title="Thank You",
            message=DISQUALIFIED_MESSAGE,
            advisory=advisory,
            advisory_message=_advisory_message(advisory),
            allow_contact=True,
            simplified_contact=True,
            allow_restart=True,
            resources=[{"title": t, "href": h} for t, h in RESOURCES],
        )
    return ResultView(
        action=ResultAction.PRESENT_CONTACT_CAPTURE,
        message=QUALIFIED_MESSAGE,
        allow_contact=True,
        allow_restart=True,
    )


__all__ = [
    "ResultAction",
    "ResultView",
    "dispatch",
    "ADVISORY_SUBMISSION_FAILED",
    "SUBMISSION_FAILED_MESSAGE",
    "RESOURCES",
    "NEXT_STEPS",
]
