"""Contact submission orchestration.

The lead-submission collaborator is the one asynchronous boundary of the
engine. `submit_contact` moves the session to `submitting`, awaits the
collaborator exactly once, then settles on `submitted` or `failed`. A reported
error and a raised exception are treated identically; neither escapes.
"""

from __future__ import annotations

from typing import Any, Awaitable, Dict, Mapping, Protocol, Union
import inspect
import logging

import anyio

from claimcheck.logic.dispatcher import ADVISORY_SUBMISSION_FAILED
from claimcheck.logic.errors import SubmissionError
from claimcheck.logic.events import LEAD_SUBMISSION_FAILED, LEAD_SUBMITTED, publish
from claimcheck.logic.repository_leads import insert_lead
from claimcheck.logic.sessions import Session
from claimcheck.models.contact import ContactInfo, SubmissionOutcome
from claimcheck.models.flow import FlowState, Verdict

logger = logging.getLogger(__name__)

OutcomeLike = Union[SubmissionOutcome, Mapping[str, Any]]


class LeadSubmitter(Protocol):
    def __call__(
        self,
        answers: Dict[str, Any],
        contact: ContactInfo,
        is_test_mode: bool,
    ) -> Union[OutcomeLike, Awaitable[OutcomeLike]]:
        ...


class DatabaseLeadSubmitter:
    """Persist leads through the local repository on a worker thread."""

    async def __call__(self, answers: Dict[str, Any], contact: ContactInfo, is_test_mode: bool) -> SubmissionOutcome:
        contact_data = contact.model_dump(exclude={"csrf_token"})
        lead_id = await anyio.to_thread.run_sync(insert_lead, answers, contact_data, is_test_mode)
        return SubmissionOutcome(status="ok", message=lead_id)


def _coerce_outcome(raw: Any) -> SubmissionOutcome:
    if isinstance(raw, SubmissionOutcome):
        return raw
    return SubmissionOutcome.model_validate(raw)


async def _call_submitter(
    submitter: LeadSubmitter,
    answers: Dict[str, Any],
    contact: ContactInfo,
    is_test_mode: bool,
) -> SubmissionOutcome:
    result = submitter(answers, contact, is_test_mode)
    if inspect.isawaitable(result):
        result = await result
    outcome = _coerce_outcome(result)
    if outcome.status != "ok":
        raise SubmissionError(outcome.message or "lead submission was rejected")
    return outcome


async def submit_contact(
    session: Session,
    contact: ContactInfo,
    submitter: LeadSubmitter,
    *,
    is_test_mode: bool = False,
) -> FlowState:
    """Submit contact details for a completed session.

    Raises `FlowIncompleteError`, `SubmissionInFlightError` or
    `AlreadySubmittedError` before anything is sent; collaborator failures are
    absorbed into `submission_state = failed`.
    """
    session.begin_submission()
    answers = dict(session.answers)
    simplified = session.state.verdict == Verdict.DISQUALIFIED
    logger.info(
        "submission_start session_id=%s simplified=%s test_mode=%s",
        session.session_id,
        simplified,
        is_test_mode,
    )
    try:
        outcome = await _call_submitter(submitter, answers, contact, is_test_mode)
    except Exception as exc:  # collaborator faults are recoverable by contract
        err = exc if isinstance(exc, SubmissionError) else SubmissionError(str(exc) or type(exc).__name__, cause=exc)
        logger.error(
            "submission_failed session_id=%s reason=%s",
            session.session_id,
            err.message,
            exc_info=not isinstance(exc, SubmissionError),
        )
        state = session.finish_submission(ok=False, advisory=ADVISORY_SUBMISSION_FAILED)
        publish(LEAD_SUBMISSION_FAILED, {"session_id": session.session_id, "reason": err.message})
        return state

    state = session.finish_submission(ok=True)
    publish(
        LEAD_SUBMITTED,
        {
            "session_id": session.session_id,
            "verdict": state.verdict,
            "simplified": simplified,
            "reference": outcome.message,
        },
    )
    return state


__all__ = ["LeadSubmitter", "DatabaseLeadSubmitter", "submit_contact"]
