"""Functional tests for answer recording and coercion."""

from __future__ import annotations

import pytest

from claimcheck.logic.answer_store import canonical_bool, record_answer
from claimcheck.logic.catalog import build_default_catalog
from claimcheck.logic.errors import QuestionValidationError, UnknownQuestionError


@pytest.fixture
def catalog(clock):
    return build_default_catalog(clock=clock)


@pytest.mark.parametrize(
    "raw,expected",
    [(True, True), (False, False), (None, None), ("Yes", True), ("no", False), ("unsure", None)],
)
def test_canonical_bool(raw, expected):
    assert canonical_bool(raw) is expected


def test_canonical_bool_rejects_other_tokens():
    with pytest.raises(ValueError):
        canonical_bool("perhaps")


def test_record_answer_is_copy_on_write(catalog):
    before = {"accidentDate": "2026-01-01"}
    after = record_answer(catalog, before, "medicalTreatment", "yes")
    assert after == {"accidentDate": "2026-01-01", "medicalTreatment": True}
    assert before == {"accidentDate": "2026-01-01"}


def test_record_answer_overwrites(catalog):
    answers = record_answer(catalog, {}, "hasAttorney", "no")
    answers = record_answer(catalog, answers, "hasAttorney", "yes")
    assert answers["hasAttorney"] == "yes"


def test_record_unknown_question(catalog):
    with pytest.raises(UnknownQuestionError):
        record_answer(catalog, {}, "favouriteColour", "blue")


def test_follow_up_not_answerable_before_insertion(catalog):
    with pytest.raises(UnknownQuestionError):
        record_answer(catalog, {}, "medicalTreatmentDate", "2026-01-01")


def test_checkbox_toggle_and_mapping_merge(catalog):
    answers = record_answer(catalog, {}, "insuranceCoverage", {"id": "uninsured", "checked": True})
    assert answers["insuranceCoverage"] == {"liability": False, "uninsured": True, "underinsured": False}
    answers = record_answer(catalog, answers, "insuranceCoverage", {"liability": True, "uninsured": False})
    assert answers["insuranceCoverage"] == {"liability": True, "uninsured": False, "underinsured": False}


def test_checkbox_unknown_flag(catalog):
    with pytest.raises(QuestionValidationError):
        record_answer(catalog, {}, "insuranceCoverage", {"medicare": True})


def test_date_strings_are_trimmed(catalog):
    answers = record_answer(catalog, {}, "accidentDate", " 2026-03-01 ")
    assert answers["accidentDate"] == "2026-03-01"


def test_boolean_garbage_rejected(catalog):
    with pytest.raises(QuestionValidationError):
        record_answer(catalog, {}, "priorSettlement", 3)


@pytest.mark.parametrize("flag", [["liability"], {"liability": True}, 3, None])
def test_checkbox_toggle_with_non_string_id(catalog, flag):
    with pytest.raises(QuestionValidationError) as ei:
        record_answer(catalog, {}, "insuranceCoverage", {"id": flag, "checked": True})
    assert ei.value.question_id == "insuranceCoverage"
