"""Session view assembly.

Single place that turns a session snapshot into the payload the display
collaborator renders: the current question with an input affordance matching
its kind, or the terminal result chosen by the dispatcher.
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Any, Mapping

from claimcheck.logic import flow
from claimcheck.logic.answer_store import initial_checkbox_value
from claimcheck.logic.dispatcher import ResultAction, dispatch
from claimcheck.logic.sessions import Session
from claimcheck.models.question import QuestionDefinition, QuestionKind, effective_options
from claimcheck.models.response_types import (
    FlowStateView,
    InputView,
    OptionView,
    ProgressView,
    QuestionView,
    ResultViewModel,
    SessionView,
    ValidationErrorView,
)


def _is_selected(current: Any, option_value: Any, answered: bool) -> bool:
    if not answered:
        return False
    return current is option_value or (type(current) is type(option_value) and current == option_value)


def build_input(question: QuestionDefinition, answers: Mapping[str, Any], today: str) -> InputView:
    answered = question.id in answers
    current = answers.get(question.id)
    if question.kind == QuestionKind.DATE:
        return InputView(widget="date", max=today)
    if question.kind == QuestionKind.CHECKBOX:
        flags = current if isinstance(current, Mapping) else initial_checkbox_value(question)
        return InputView(
            widget="checkbox_group",
            options=[
                OptionView(value=opt.value, label=opt.label, selected=bool(flags.get(opt.value, False)))
                for opt in question.options
            ],
        )
    widget = "buttons" if question.kind == QuestionKind.BOOLEAN else "choice_list"
    return InputView(
        widget=widget,
        options=[
            OptionView(value=opt.value, label=opt.label, selected=_is_selected(current, opt.value, answered))
            for opt in effective_options(question)
        ],
    )


def assemble_session_view(session: Session) -> SessionView:
    snap = session.snapshot
    state = snap.state
    question_view = None
    question = session.current_question()
    if question is not None and not state.terminated:
        question_view = QuestionView(
            id=question.id,
            prompt=question.prompt,
            help_text=question.help_text,
            kind=question.kind,
            input=build_input(question, snap.answers, session.clock().isoformat()),
            action_label=flow.action_label(snap.catalog, state),
            can_go_back=state.cursor > 0,
        )

    result = dispatch(state)
    result_model = None
    if result.action != ResultAction.SHOW_QUESTION:
        result_model = ResultViewModel(**asdict(result))

    error = snap.validation_error
    return SessionView(
        session_id=session.session_id,
        state=FlowStateView(
            cursor=state.cursor,
            verdict=state.verdict,
            terminated=state.terminated,
            submission_state=state.submission_state,
            advisory=state.advisory,
        ),
        progress=ProgressView(**flow.progress(snap.catalog, state)),
        question=question_view,
        answers=dict(snap.answers),
        validation_error=ValidationErrorView(question_id=error.question_id, message=error.message) if error else None,
        result=result_model,
    )


__all__ = ["build_input", "assemble_session_view"]
