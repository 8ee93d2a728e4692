"""Question definition value types.

Questions are immutable templates. Per-kind behaviour is selected through the
`kind` tag (see `QuestionKind`) and each definition may carry its own
validator with the uniform signature `(value, answers) -> bool`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Tuple


Answers = Mapping[str, Any]
Validator = Callable[[Any, Answers], bool]
Condition = Callable[[Any], bool]


class QuestionKind:
    BOOLEAN = "boolean"
    DATE = "date"
    SELECT = "select"
    CHECKBOX = "checkbox"

    ALL = (BOOLEAN, DATE, SELECT, CHECKBOX)


@dataclass(frozen=True)
class AnswerOption:
    value: Any
    label: str
    # Only consulted for select questions; absent means qualifying
    is_qualifying: bool = True


@dataclass(frozen=True)
class FollowUp:
    condition: Condition
    question: "QuestionDefinition"


@dataclass(frozen=True)
class QuestionDefinition:
    id: str
    prompt: str
    kind: str
    help_text: Optional[str] = None
    options: Tuple[AnswerOption, ...] = ()
    validate: Optional[Validator] = None
    reverse_logic: bool = False
    follow_up: Optional[FollowUp] = None
    # Message shown when `validate` rejects the answer
    invalid_message: Optional[str] = None

    def __post_init__(self) -> None:
        if self.kind not in QuestionKind.ALL:
            raise ValueError(f"unknown question kind: {self.kind!r}")
        if not self.id:
            raise ValueError("question id must be non-empty")


BOOLEAN_DEFAULT_OPTIONS: Tuple[AnswerOption, ...] = (
    AnswerOption(True, "Yes"),
    AnswerOption(False, "No"),
)


def effective_options(question: QuestionDefinition) -> Tuple[AnswerOption, ...]:
    """Return the options a question offers, applying the Yes/No default for booleans."""
    if question.options:
        return question.options
    if question.kind == QuestionKind.BOOLEAN:
        return BOOLEAN_DEFAULT_OPTIONS
    return ()


Catalog = Tuple[QuestionDefinition, ...]


__all__ = [
    "Answers",
    "Validator",
    "Condition",
    "QuestionKind",
    "AnswerOption",
    "FollowUp",
    "QuestionDefinition",
    "BOOLEAN_DEFAULT_OPTIONS",
    "effective_options",
    "Catalog",
]
