"""Per-user evaluation sessions.

A session wraps one immutable `SessionSnapshot` (catalog, answers, flow state,
pending validation error). Every action builds a new snapshot and swaps it in
with a single assignment, so a failed action never leaves partial changes and
"start new evaluation" resets everything at once.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any, Callable, Mapping, Optional
import logging
import uuid

from claimcheck.config import QualificationConfig
from claimcheck.logic import flow
from claimcheck.logic.answer_store import empty_answers, record_answer
from claimcheck.logic.catalog import build_default_catalog, current_question
from claimcheck.logic.errors import (
    AlreadySubmittedError,
    FlowIncompleteError,
    FlowLockedError,
    FlowTerminatedError,
    QuestionValidationError,
    SessionNotFoundError,
    SubmissionInFlightError,
)
from claimcheck.logic.events import (
    QUALIFICATION_EVALUATED,
    SESSION_RESTARTED,
    SESSION_STARTED,
    publish,
)
from claimcheck.logic.inmemory_state import SESSIONS
from claimcheck.logic.validation import Clock
from claimcheck.models.flow import INITIAL_FLOW_STATE, FlowState, SubmissionState, Verdict
from claimcheck.models.question import Catalog, QuestionDefinition

logger = logging.getLogger(__name__)

CatalogFactory = Callable[[QualificationConfig, Clock], Catalog]


@dataclass(frozen=True)
class FieldError:
    question_id: str
    message: str


@dataclass(frozen=True)
class SessionSnapshot:
    catalog: Catalog
    answers: Mapping[str, Any] = field(default_factory=dict)
    state: FlowState = INITIAL_FLOW_STATE
    validation_error: Optional[FieldError] = None


class Session:
    def __init__(
        self,
        session_id: str,
        config: QualificationConfig | None = None,
        clock: Clock = date.today,
        catalog_factory: CatalogFactory = build_default_catalog,
    ) -> None:
        self.session_id = session_id
        self.config = config or QualificationConfig()
        self.clock = clock
        self._catalog_factory = catalog_factory
        self.snapshot = self._fresh_snapshot()

    def _fresh_snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            catalog=self._catalog_factory(self.config, self.clock),
            answers=empty_answers(),
            state=INITIAL_FLOW_STATE,
        )

    # Convenience accessors
    @property
    def state(self) -> FlowState:
        return self.snapshot.state

    @property
    def answers(self) -> Mapping[str, Any]:
        return self.snapshot.answers

    @property
    def catalog(self) -> Catalog:
        return self.snapshot.catalog

    def current_question(self) -> Optional[QuestionDefinition]:
        return current_question(self.catalog, self.state.cursor)

    # Actions
    def answer(self, question_id: str, raw: Any) -> SessionSnapshot:
        if self.state.terminated:
            raise FlowTerminatedError("questionnaire already completed; go back to change an answer")
        answers = record_answer(self.catalog, self.answers, question_id, raw)
        self.snapshot = replace(self.snapshot, answers=answers, validation_error=None)
        return self.snapshot

    def next(self) -> flow.FlowTransition:
        snap = self.snapshot
        today = self.clock()
        try:
            transition = flow.advance(snap.catalog, snap.answers, snap.state, config=self.config, today=today)
        except QuestionValidationError as exc:
            logger.info(
                "flow_validation_failed session_id=%s question_id=%s",
                self.session_id,
                exc.question_id,
            )
            self.snapshot = replace(snap, validation_error=FieldError(exc.question_id, exc.message))
            raise
        self.snapshot = replace(
            snap,
            catalog=transition.catalog,
            state=transition.state,
            validation_error=None,
        )
        logger.info(
            "flow_advance session_id=%s cursor=%s terminated=%s verdict=%s",
            self.session_id,
            transition.state.cursor,
            transition.state.terminated,
            transition.state.verdict,
        )
        if transition.evaluation is not None:
            publish(
                QUALIFICATION_EVALUATED,
                {
                    "session_id": self.session_id,
                    "qualified": transition.evaluation.qualified,
                    "reasons": list(transition.evaluation.reasons),
                    "advisory": transition.evaluation.advisory,
                },
            )
        return transition

    def back(self) -> SessionSnapshot:
        state = flow.retreat(self.catalog, self.state)
        self.snapshot = replace(self.snapshot, state=state, validation_error=None)
        return self.snapshot

    def restart(self) -> SessionSnapshot:
        if self.state.submission_state == SubmissionState.SUBMITTING:
            raise FlowLockedError("a submission is in progress")
        self.snapshot = self._fresh_snapshot()
        publish(SESSION_RESTARTED, {"session_id": self.session_id})
        return self.snapshot

    # Submission lifecycle
    def begin_submission(self) -> FlowState:
        """Mark the session as submitting; at most one submission in flight."""
        state = self.state
        if not state.terminated or state.verdict == Verdict.UNKNOWN:
            raise FlowIncompleteError("questionnaire must be completed before submitting contact details")
        if state.submission_state == SubmissionState.SUBMITTING:
            raise SubmissionInFlightError("a submission is already in progress")
        if state.submission_state == SubmissionState.SUBMITTED:
            raise AlreadySubmittedError("contact details were already submitted")
        new_state = state.evolve(submission_state=SubmissionState.SUBMITTING, advisory=None)
        self.snapshot = replace(self.snapshot, state=new_state)
        return new_state

    def finish_submission(self, ok: bool, advisory: Optional[str] = None) -> FlowState:
        outcome = SubmissionState.SUBMITTED if ok else SubmissionState.FAILED
        new_state = self.state.evolve(submission_state=outcome, advisory=None if ok else advisory)
        self.snapshot = replace(self.snapshot, state=new_state)
        return new_state


def open_session(
    config: QualificationConfig | None = None,
    clock: Clock = date.today,
    catalog_factory: CatalogFactory = build_default_catalog,
) -> Session:
    session = Session(str(uuid.uuid4()), config=config, clock=clock, catalog_factory=catalog_factory)
    SESSIONS[session.session_id] = session
    publish(SESSION_STARTED, {"session_id": session.session_id})
    return session


def get_session(session_id: str) -> Session:
    try:
        return SESSIONS[session_id]
    except KeyError:
        raise SessionNotFoundError(session_id) from None


def close_session(session_id: str) -> None:
    if SESSIONS.pop(session_id, None) is None:
        raise SessionNotFoundError(session_id)


__all__ = [
    "FieldError",
    "SessionSnapshot",
    "Session",
    "open_session",
    "get_session",
    "close_session",
]
