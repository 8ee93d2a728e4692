"""Answer store helpers.

The store is a plain mapping of question id -> answer value. Every write
returns a new dict; callers swap it into the session snapshot. A missing key
means unanswered, a present `None` means an explicit "unsure".
"""

from __future__ import annotations

from typing import Any, Dict, Mapping

from claimcheck.logic.catalog import find_question
from claimcheck.logic.errors import QuestionValidationError, UnknownQuestionError
from claimcheck.logic.validation import MSG_INVALID_DATE, MSG_REQUIRED
from claimcheck.models.question import Catalog, QuestionDefinition, QuestionKind


_TRUE_TOKENS = {"true", "yes", "y"}
_FALSE_TOKENS = {"false", "no", "n"}
_NULL_TOKENS = {"null", "none", "unsure", "unknown"}


def empty_answers() -> Dict[str, Any]:
    return {}


def canonical_bool(raw: Any) -> bool | None:
    """Coerce a raw boolean-ish input to True/False/None.

    Raises ValueError for tokens that are not boolean-like.
    """
    if raw is None or isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        tok = raw.strip().lower()
        if tok in _TRUE_TOKENS:
            return True
        if tok in _FALSE_TOKENS:
            return False
        if tok in _NULL_TOKENS:
            return None
    raise ValueError(f"not a boolean token: {raw!r}")


def _coverage_flags(question: QuestionDefinition) -> list[str]:
    return [str(opt.value) for opt in question.options]


def initial_checkbox_value(question: QuestionDefinition) -> Dict[str, bool]:
    return {flag: False for flag in _coverage_flags(question)}


def _merge_checkbox(question: QuestionDefinition, current: Any, raw: Any) -> Dict[str, bool]:
    flags = _coverage_flags(question)
    merged = dict(current) if isinstance(current, Mapping) else initial_checkbox_value(question)
    if not isinstance(raw, Mapping):
        raise QuestionValidationError(question.id, MSG_REQUIRED)
    # Single toggle shape: {"id": "<flag>", "checked": bool}
    if set(raw.keys()) == {"id", "checked"}:
        if not isinstance(raw["id"], str):
            raise QuestionValidationError(question.id, MSG_REQUIRED)
        updates = {raw["id"]: raw["checked"]}
    else:
        updates = dict(raw)
    for flag, checked in updates.items():
        if flag not in flags or not isinstance(checked, bool):
            raise QuestionValidationError(question.id, MSG_REQUIRED)
        merged[flag] = checked
    return merged


def coerce_answer(question: QuestionDefinition, raw: Any, current: Any = None) -> Any:
    """Coerce raw user input into the stored representation for `question.kind`."""
    if question.kind == QuestionKind.BOOLEAN:
        try:
            return canonical_bool(raw)
        except ValueError:
            raise QuestionValidationError(question.id, MSG_REQUIRED) from None
    if question.kind == QuestionKind.DATE:
        if raw is None:
            return None
        if not isinstance(raw, str):
            raise QuestionValidationError(question.id, MSG_INVALID_DATE)
        return raw.strip()
    if question.kind == QuestionKind.SELECT:
        if raw is not None and not isinstance(raw, str):
            raise QuestionValidationError(question.id, MSG_REQUIRED)
        return raw
    return _merge_checkbox(question, current, raw)


def record_answer(catalog: Catalog, answers: Mapping[str, Any], question_id: str, raw: Any) -> Dict[str, Any]:
    """Return a new answer mapping with `question_id` set from `raw`.

    Only questions present in the live catalog can be answered.
    """
    question = find_question(catalog, question_id)
    if question is None:
        raise UnknownQuestionError(question_id)
    value = coerce_answer(question, raw, answers.get(question_id))
    updated = dict(answers)
    updated[question_id] = value
    return updated


__all__ = [
    "empty_answers",
    "canonical_bool",
    "initial_checkbox_value",
    "coerce_answer",
    "record_answer",
]
