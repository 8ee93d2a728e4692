"""Question catalog operations and the default claim qualification catalog.

The catalog is an immutable ordered tuple of `QuestionDefinition`. Follow-up
insertion is copy-on-write: the caller's tuple is never modified, so earlier
snapshots stay valid for back-navigation.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Optional
import logging

from claimcheck.config import QualificationConfig
from claimcheck.logic.errors import CatalogError
from claimcheck.logic.validation import (
    Clock,
    MSG_TREATMENT_BEFORE_ACCIDENT,
    accident_date_validator,
    any_flag_selected,
    treatment_date_validator,
)
from claimcheck.models.question import (
    AnswerOption,
    Catalog,
    FollowUp,
    QuestionDefinition,
    QuestionKind,
    effective_options,
)

logger = logging.getLogger(__name__)


def current_question(catalog: Catalog, cursor: int) -> Optional[QuestionDefinition]:
    if 0 <= cursor < len(catalog):
        return catalog[cursor]
    return None


def find_question(catalog: Catalog, question_id: str) -> Optional[QuestionDefinition]:
    for q in catalog:
        if q.id == question_id:
            return q
    return None


def find_option(question: QuestionDefinition, value: Any) -> Optional[AnswerOption]:
    for opt in effective_options(question):
        if opt.value is value or (type(opt.value) is type(value) and opt.value == value):
            return opt
    return None


def insert_after(catalog: Catalog, index: int, question: QuestionDefinition) -> Catalog:
    """Return a new catalog with `question` spliced in right after `index`.

    Idempotent: when a question with the same id already sits at `index + 1`
    the input catalog is returned unchanged. Inserting an id that exists
    elsewhere raises `CatalogError` so ids stay unique.
    """
    if not 0 <= index < len(catalog):
        raise IndexError(f"insert index out of range: {index}")
    nxt = current_question(catalog, index + 1)
    if nxt is not None and nxt.id == question.id:
        return catalog
    if find_question(catalog, question.id) is not None:
        raise CatalogError(f"question id already present in catalog: {question.id}")
    logger.info("catalog_insert question_id=%s after_index=%s", question.id, index)
    return catalog[: index + 1] + (question,) + catalog[index + 1 :]


# ---------------------------------------------------------------------------
# Default catalog
# ---------------------------------------------------------------------------

ACCIDENT_DATE = "accidentDate"
MEDICAL_TREATMENT = "medicalTreatment"
MEDICAL_TREATMENT_DATE = "medicalTreatmentDate"
AT_FAULT = "atFault"
HAS_ATTORNEY = "hasAttorney"
MOVING_VIOLATION = "movingViolation"
PRIOR_SETTLEMENT = "priorSettlement"
INSURANCE_COVERAGE = "insuranceCoverage"

COVERAGE_FLAGS = ("liability", "uninsured", "underinsured")


def _window_phrase(days: int) -> str:
    if days == 365:
        return "the last 12 months"
    return f"the last {days} days"


def build_default_catalog(config: QualificationConfig | None = None, clock: Clock = date.today) -> Catalog:
    """Build the accident-claim questionnaire.

    `clock` supplies "today" to the date validators so tests can pin time.
    """
    cfg = config or QualificationConfig()

    treatment_date = QuestionDefinition(
        id=MEDICAL_TREATMENT_DATE,
        prompt="Approximately when did you first receive medical treatment?",
        help_text="An approximate date is fine.",
        kind=QuestionKind.DATE,
        validate=treatment_date_validator(clock, accident_field=ACCIDENT_DATE),
        invalid_message=MSG_TREATMENT_BEFORE_ACCIDENT,
    )

    return (
        QuestionDefinition(
            id=ACCIDENT_DATE,
            prompt="When did your accident occur?",
            help_text="This helps us understand the timeline of your case.",
            kind=QuestionKind.DATE,
            validate=accident_date_validator(cfg.accident_window_days, clock),
            invalid_message=(
                f"Your accident must have occurred within {_window_phrase(cfg.accident_window_days)}."
            ),
        ),
        QuestionDefinition(
            id=MEDICAL_TREATMENT,
            prompt="Did you receive medical treatment after the accident?",
            help_text="Medical records are important for documenting your injuries.",
            kind=QuestionKind.BOOLEAN,
            follow_up=FollowUp(condition=lambda value: value is True, question=treatment_date),
        ),
        QuestionDefinition(
            id=AT_FAULT,
            prompt="Were you found at fault for the accident?",
            help_text="This helps us understand liability in your case.",
            kind=QuestionKind.BOOLEAN,
            options=(
                AnswerOption(True, "Yes"),
                AnswerOption(False, "No"),
                AnswerOption(None, "Unsure"),
            ),
            reverse_logic=True,
        ),
        QuestionDefinition(
            id=HAS_ATTORNEY,
            prompt="Do you currently have an attorney handling your case?",
            help_text="We want to ensure we're not interfering with existing representation.",
            kind=QuestionKind.SELECT,
            options=(
                AnswerOption("no", "No", is_qualifying=True),
                AnswerOption("yes-change", "Yes, but I'm considering a change", is_qualifying=True),
                AnswerOption("yes", "Yes, and I want to keep them", is_qualifying=False),
            ),
        ),
        QuestionDefinition(
            id=MOVING_VIOLATION,
            prompt="Did you receive a traffic ticket or moving violation from this accident?",
            help_text="This helps us understand the circumstances of the accident.",
            kind=QuestionKind.BOOLEAN,
            reverse_logic=True,
        ),
        QuestionDefinition(
            id=PRIOR_SETTLEMENT,
            prompt="Have you already received a settlement for this accident?",
            help_text="This helps us understand if your case has already been resolved.",
            kind=QuestionKind.BOOLEAN,
            reverse_logic=True,
        ),
        QuestionDefinition(
            id=INSURANCE_COVERAGE,
            prompt="Which insurance coverage is applicable in your situation?",
            help_text="Select all that apply. This helps us understand potential sources of recovery.",
            kind=QuestionKind.CHECKBOX,
            options=(
                AnswerOption("liability", "The other party's insurance"),
                AnswerOption("uninsured", "Your Uninsured Motorist (UM) coverage"),
                AnswerOption("underinsured", "Your Underinsured Motorist (UIM) coverage"),
            ),
            validate=any_flag_selected,
        ),
    )


__all__ = [
    "current_question",
    "find_question",
    "find_option",
    "insert_after",
    "build_default_catalog",
    "COVERAGE_FLAGS",
    "ACCIDENT_DATE",
    "MEDICAL_TREATMENT",
    "MEDICAL_TREATMENT_DATE",
    "AT_FAULT",
    "HAS_ATTORNEY",
    "MOVING_VIOLATION",
    "PRIOR_SETTLEMENT",
    "INSURANCE_COVERAGE",
]
