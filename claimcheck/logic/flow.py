"""Navigation/flow controller.

State machine over {Asking(i), Terminated}. Every operation is a pure
function of (catalog, answers, state) returning new values; on failure the
inputs are left exactly as they were.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping, Optional
import logging

from claimcheck.config import QualificationConfig
from claimcheck.logic.catalog import current_question, find_option, insert_after
from claimcheck.logic.errors import FlowLockedError, FlowTerminatedError
from claimcheck.logic.qualification import QualificationResult, evaluate
from claimcheck.logic.validation import validate_answer
from claimcheck.models.flow import FlowState, SubmissionState, Verdict
from claimcheck.models.question import Catalog, QuestionDefinition, QuestionKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FlowTransition:
    catalog: Catalog
    state: FlowState
    # Present only when the transition ran the evaluator
    evaluation: Optional[QualificationResult] = None


def is_disqualifying(question: QuestionDefinition, value: Any) -> bool:
    """Return True when `value` ends the flow early for `question`.

    Reverse-logic booleans disqualify on an explicit `True`; selects
    disqualify when the chosen option is flagged non-qualifying.
    """
    if question.kind == QuestionKind.BOOLEAN:
        return question.reverse_logic and value is True
    if question.kind == QuestionKind.SELECT:
        opt = find_option(question, value)
        return opt is not None and not opt.is_qualifying
    return False


def _verdict_for(result: QualificationResult) -> str:
    return Verdict.QUALIFIED if result.qualified else Verdict.DISQUALIFIED


def advance(
    catalog: Catalog,
    answers: Mapping[str, Any],
    state: FlowState,
    *,
    config: QualificationConfig | None = None,
    today: date | None = None,
) -> FlowTransition:
    """Validate the current answer and move the cursor forward.

    Raises `QuestionValidationError` when the current answer is missing or
    invalid and `FlowTerminatedError` once the flow has ended.
    """
    question = current_question(catalog, state.cursor)
    if state.terminated or question is None:
        raise FlowTerminatedError("questionnaire already completed")

    ref = today or date.today()
    validate_answer(question, answers, clock=lambda: ref)
    value = answers[question.id]

    if question.follow_up is not None and question.follow_up.condition(value):
        catalog = insert_after(catalog, state.cursor, question.follow_up.question)

    if is_disqualifying(question, value):
        result = evaluate(answers, config=config, today=ref)
        logger.info(
            "flow_early_exit question_id=%s reasons=%s",
            question.id,
            result.reasons,
        )
        return FlowTransition(
            catalog=catalog,
            state=state.evolve(
                cursor=len(catalog),
                verdict=Verdict.DISQUALIFIED,
                terminated=True,
                advisory=result.advisory,
                exit_cursor=state.cursor,
            ),
            evaluation=result,
        )

    result: Optional[QualificationResult] = None
    verdict = state.verdict
    advisory = state.advisory
    if state.cursor == len(catalog) - 1:
        result = evaluate(answers, config=config, today=ref)
        verdict = _verdict_for(result)
        advisory = result.advisory
        logger.info("flow_evaluated qualified=%s reasons=%s", result.qualified, result.reasons)

    cursor = state.cursor + 1
    return FlowTransition(
        catalog=catalog,
        state=state.evolve(
            cursor=cursor,
            verdict=verdict,
            terminated=cursor >= len(catalog),
            advisory=advisory,
        ),
        evaluation=result,
    )


def retreat(catalog: Catalog, state: FlowState) -> FlowState:
    """Step back one question.

    Leaving the terminal position reopens the question that ended the flow
    and clears the verdict. After an early exit that is the disqualifying
    question, not the last catalog entry a plain `cursor - 1` would reach.
    Refused once a contact submission has started.
    Inserted follow-ups and recorded answers are kept.
    """
    if state.terminated:
        if state.submission_state != SubmissionState.NOT_SUBMITTED:
            raise FlowLockedError("contact details already submitted for this evaluation")
        cursor = state.exit_cursor if state.exit_cursor is not None else max(0, len(catalog) - 1)
        return state.evolve(
            cursor=cursor,
            terminated=False,
            verdict=Verdict.UNKNOWN,
            advisory=None,
            exit_cursor=None,
        )
    return state.evolve(cursor=max(0, state.cursor - 1))


def progress(catalog: Catalog, state: FlowState) -> dict:
    total = len(catalog)
    step = min(state.cursor + 1, total)
    return {"step": step, "total": total, "completed": state.terminated}


def action_label(catalog: Catalog, state: FlowState) -> str:
    return "Submit" if state.cursor == len(catalog) - 1 else "Next"


__all__ = [
    "FlowTransition",
    "is_disqualifying",
    "advance",
    "retreat",
    "progress",
    "action_label",
]
