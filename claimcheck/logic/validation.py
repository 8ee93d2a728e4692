"""Kind-aware validation of recorded answers.

Validation runs before the flow controller advances. Failures raise
`QuestionValidationError` carrying a user-facing message; nothing is mutated.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Callable, Mapping

from claimcheck.logic.errors import QuestionValidationError
from claimcheck.models.question import QuestionDefinition, QuestionKind, effective_options


MSG_REQUIRED = "Please answer this question to continue."
MSG_INVALID_DATE = "Please enter a valid date."
MSG_FUTURE_DATE = "Date cannot be in the future."
MSG_TREATMENT_BEFORE_ACCIDENT = "Treatment date cannot be before the accident date."

ISO_DATE_FORMAT = "%Y-%m-%d"

Clock = Callable[[], date]


def parse_iso_date(raw: Any) -> date:
    """Parse a `YYYY-MM-DD` string (or pass through a date).

    Raises ValueError for anything else, including datetimes and empty strings.
    """
    if isinstance(raw, datetime):
        raise ValueError("expected a calendar date, got datetime")
    if isinstance(raw, date):
        return raw
    if not isinstance(raw, str):
        raise ValueError(f"expected ISO date string, got {type(raw).__name__}")
    return datetime.strptime(raw.strip(), ISO_DATE_FORMAT).date()


def try_parse_date(raw: Any) -> date | None:
    try:
        return parse_iso_date(raw)
    except ValueError:
        return None


def accident_date_validator(window_days: int, clock: Clock) -> Callable[[Any, Mapping[str, Any]], bool]:
    """Accept dates that are not in the future and no older than `window_days`."""

    def _validate(value: Any, answers: Mapping[str, Any]) -> bool:
        parsed = try_parse_date(value)
        if parsed is None:
            return False
        today = clock()
        return parsed <= today and (today - parsed).days <= window_days

    return _validate


def treatment_date_validator(clock: Clock, accident_field: str = "accidentDate") -> Callable[[Any, Mapping[str, Any]], bool]:
    """Accept dates not in the future and not before the recorded accident date."""

    def _validate(value: Any, answers: Mapping[str, Any]) -> bool:
        parsed = try_parse_date(value)
        if parsed is None or parsed > clock():
            return False
        accident = try_parse_date(answers.get(accident_field))
        if accident is not None and parsed < accident:
            return False
        return True

    return _validate


def any_flag_selected(value: Any, answers: Mapping[str, Any]) -> bool:
    return isinstance(value, Mapping) and any(v is True for v in value.values())


def _check_choice(question: QuestionDefinition, value: Any) -> None:
    allowed = [opt.value for opt in effective_options(question)]
    # `True == 1` in Python, so compare on identity for booleans/None
    if not any(value is a or (type(value) is type(a) and value == a) for a in allowed):
        raise QuestionValidationError(question.id, MSG_REQUIRED)


def _check_date(question: QuestionDefinition, value: Any, clock: Clock | None) -> None:
    parsed = try_parse_date(value)
    if parsed is None:
        raise QuestionValidationError(question.id, MSG_INVALID_DATE)
    if clock is not None and parsed > clock():
        raise QuestionValidationError(question.id, MSG_FUTURE_DATE)


def validate_answer(question: QuestionDefinition, answers: Mapping[str, Any], clock: Clock | None = None) -> None:
    """Validate the recorded answer for `question`.

    - The answer must be present (an explicit `None` counts only where the
      question offers a `None` option, e.g. "Unsure").
    - Booleans and selects must match one of the offered option values.
    - Dates must parse and, when a clock is given, not lie in the future.
    - The question's own validator, if any, receives the full answer mapping.
    """
    if question.id not in answers:
        raise QuestionValidationError(question.id, MSG_REQUIRED)
    value = answers[question.id]

    if question.kind in (QuestionKind.BOOLEAN, QuestionKind.SELECT):
        _check_choice(question, value)
    elif question.kind == QuestionKind.DATE:
        if value is None or (isinstance(value, str) and not value.strip()):
            raise QuestionValidationError(question.id, MSG_REQUIRED)
        _check_date(question, value, clock)
    elif question.kind == QuestionKind.CHECKBOX:
        validator = question.validate or any_flag_selected
        if not validator(value, answers):
            raise QuestionValidationError(question.id, question.invalid_message or MSG_REQUIRED)
        return

    if question.validate is not None and not question.validate(value, answers):
        fallback = MSG_INVALID_DATE if question.kind == QuestionKind.DATE else MSG_REQUIRED
        raise QuestionValidationError(question.id, question.invalid_message or fallback)


__all__ = [
    "MSG_REQUIRED",
    "MSG_INVALID_DATE",
    "MSG_FUTURE_DATE",
    "MSG_TREATMENT_BEFORE_ACCIDENT",
    "Clock",
    "parse_iso_date",
    "try_parse_date",
    "accident_date_validator",
    "treatment_date_validator",
    "any_flag_selected",
    "validate_answer",
]
