"""Qualification verdict computation.

Evaluates the accumulated answers against every eligibility criterion and
reports the failed ones. The function is pure: same answers, same `today`,
same config -> same result. Malformed dates never escape as exceptions; they
degrade to `qualified=False` with a processing-error advisory.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any, List, Mapping, Optional
import logging

from claimcheck.config import QualificationConfig
from claimcheck.logic.catalog import (
    ACCIDENT_DATE,
    AT_FAULT,
    HAS_ATTORNEY,
    INSURANCE_COVERAGE,
    MEDICAL_TREATMENT,
    MEDICAL_TREATMENT_DATE,
    MOVING_VIOLATION,
    PRIOR_SETTLEMENT,
)
from claimcheck.logic.errors import EvaluationError
from claimcheck.logic.validation import parse_iso_date

logger = logging.getLogger(__name__)

QUALIFYING_ATTORNEY_ANSWERS = frozenset({"no", "yes-change"})

ADVISORY_PROCESSING_ERROR = "processing_error"
PROCESSING_ERROR_MESSAGE = "There was an error processing your information. Please try again."

# Reason tags
ACCIDENT_NOT_RECENT = "accident_not_recent"
NO_MEDICAL_TREATMENT = "no_medical_treatment"
TREATMENT_NOT_TIMELY = "treatment_not_timely"
IS_AT_FAULT = "at_fault"
HAS_KEPT_ATTORNEY = "has_attorney"
HAD_MOVING_VIOLATION = "moving_violation"
HAD_PRIOR_SETTLEMENT = "prior_settlement"
NO_COVERAGE = "no_coverage"
MALFORMED_DATE = "malformed_date"


@dataclass(frozen=True)
class QualificationResult:
    qualified: bool
    reasons: List[str] = field(default_factory=list)
    advisory: Optional[str] = None


def _date_field(answers: Mapping[str, Any], name: str) -> date:
    raw = answers.get(name)
    try:
        return parse_iso_date(raw)
    except ValueError:
        raise EvaluationError(name, raw) from None


def _collect_reasons(answers: Mapping[str, Any], cfg: QualificationConfig, today: date) -> List[str]:
    reasons: List[str] = []

    accident = _date_field(answers, ACCIDENT_DATE)
    if accident > today or accident < today - timedelta(days=cfg.accident_window_days):
        reasons.append(ACCIDENT_NOT_RECENT)

    if answers.get(MEDICAL_TREATMENT) is not True:
        reasons.append(NO_MEDICAL_TREATMENT)

    if answers.get(MEDICAL_TREATMENT_DATE) not in (None, ""):
        treated = _date_field(answers, MEDICAL_TREATMENT_DATE)
        latest = accident + timedelta(days=cfg.treatment_window_days)
        if treated < accident or treated > today or treated > latest:
            reasons.append(TREATMENT_NOT_TIMELY)

    # Unanswered and "unsure" both count as not at fault
    if answers.get(AT_FAULT) is True:
        reasons.append(IS_AT_FAULT)

    if answers.get(HAS_ATTORNEY) not in QUALIFYING_ATTORNEY_ANSWERS:
        reasons.append(HAS_KEPT_ATTORNEY)

    if answers.get(MOVING_VIOLATION) is not False:
        reasons.append(HAD_MOVING_VIOLATION)

    if answers.get(PRIOR_SETTLEMENT) is not False:
        reasons.append(HAD_PRIOR_SETTLEMENT)

    coverage = answers.get(INSURANCE_COVERAGE)
    if not isinstance(coverage, Mapping) or not any(v is True for v in coverage.values()):
        reasons.append(NO_COVERAGE)

    return reasons


def evaluate(
    answers: Mapping[str, Any],
    *,
    config: QualificationConfig | None = None,
    today: date | None = None,
) -> QualificationResult:
    """Compute the qualification verdict for `answers`.

    All criteria are required. `today` defaults to the current date; pass it
    explicitly for reproducible results.
    """
    cfg = config or QualificationConfig()
    ref = today or date.today()
    try:
        reasons = _collect_reasons(answers, cfg, ref)
    except EvaluationError as exc:
        logger.warning("qualification_evaluation_failed field=%s raw=%r", exc.field, exc.raw)
        return QualificationResult(
            qualified=False,
            reasons=[MALFORMED_DATE],
            advisory=ADVISORY_PROCESSING_ERROR,
        )
    return QualificationResult(qualified=not reasons, reasons=reasons)


__all__ = [
    "QualificationResult",
    "evaluate",
    "QUALIFYING_ATTORNEY_ANSWERS",
    "ADVISORY_PROCESSING_ERROR",
    "PROCESSING_ERROR_MESSAGE",
    "ACCIDENT_NOT_RECENT",
    "NO_MEDICAL_TREATMENT",
    "TREATMENT_NOT_TIMELY",
    "IS_AT_FAULT",
    "HAS_KEPT_ATTORNEY",
    "HAD_MOVING_VIOLATION",
    "HAD_PRIOR_SETTLEMENT",
    "NO_COVERAGE",
    "MALFORMED_DATE",
]
