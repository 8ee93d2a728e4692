"""Functional tests for the navigation/flow controller."""

from __future__ import annotations

import pytest

from _support import TODAY, days_ago
from claimcheck.logic import flow
from claimcheck.logic.answer_store import record_answer
from claimcheck.logic.catalog import build_default_catalog, current_question
from claimcheck.logic.errors import FlowLockedError, FlowTerminatedError, QuestionValidationError
from claimcheck.models.flow import INITIAL_FLOW_STATE, SubmissionState, Verdict
from claimcheck.models.question import QuestionKind


@pytest.fixture
def catalog(clock):
    return build_default_catalog(clock=clock)


def _drive(catalog, answers, state=INITIAL_FLOW_STATE, steps=None):
    """Advance until terminated (or `steps` times), returning (catalog, state)."""
    taken = 0
    while not state.terminated and (steps is None or taken < steps):
        t = flow.advance(catalog, answers, state, today=TODAY)
        catalog, state = t.catalog, t.state
        taken += 1
    return catalog, state


def _ids(catalog):
    return [q.id for q in catalog]


def test_qualified_walkthrough_inserts_follow_up(catalog, favourable_answers):
    catalog, state = _drive(catalog, favourable_answers)
    assert state.terminated is True
    assert state.verdict == Verdict.QUALIFIED
    assert state.cursor == len(catalog)
    assert _ids(catalog)[:3] == ["accidentDate", "medicalTreatment", "medicalTreatmentDate"]


def test_no_treatment_skips_follow_up(catalog, favourable_answers):
    answers = dict(favourable_answers, medicalTreatment=False)
    del answers["medicalTreatmentDate"]
    catalog, state = _drive(catalog, answers)
    assert "medicalTreatmentDate" not in _ids(catalog)
    assert state.verdict == Verdict.DISQUALIFIED


def test_every_reverse_logic_question_exits_early(catalog, favourable_answers):
    reverse_ids = [q.id for q in catalog if q.reverse_logic]
    assert reverse_ids
    for qid in reverse_ids:
        answers = dict(favourable_answers, **{qid: True})
        final_catalog, state = _drive(catalog, answers)
        assert state.terminated is True
        assert state.verdict == Verdict.DISQUALIFIED
        assert state.cursor == len(final_catalog)
        assert final_catalog[state.exit_cursor].id == qid


def test_non_qualifying_select_exits_early(catalog, favourable_answers):
    answers = dict(favourable_answers, hasAttorney="yes")
    final_catalog, state = _drive(catalog, answers)
    assert state.verdict == Verdict.DISQUALIFIED
    assert final_catalog[state.exit_cursor].id == "hasAttorney"


def test_unsure_at_fault_continues(catalog, favourable_answers):
    answers = dict(favourable_answers, atFault=None)
    _, state = _drive(catalog, answers)
    assert state.verdict == Verdict.QUALIFIED


def test_validation_failure_leaves_state_untouched(catalog):
    answers = {"accidentDate": days_ago(500)}
    with pytest.raises(QuestionValidationError) as ei:
        flow.advance(catalog, answers, INITIAL_FLOW_STATE, today=TODAY)
    assert ei.value.question_id == "accidentDate"
    assert INITIAL_FLOW_STATE.cursor == 0
    assert len(catalog) == 7


def test_advance_after_termination_is_rejected(catalog, favourable_answers):
    catalog, state = _drive(catalog, favourable_answers)
    with pytest.raises(FlowTerminatedError):
        flow.advance(catalog, favourable_answers, state, today=TODAY)


def test_back_and_forward_does_not_duplicate_follow_up(catalog, favourable_answers):
    catalog, state = _drive(catalog, favourable_answers, steps=3)
    assert current_question(catalog, state.cursor).id == "atFault"
    state = flow.retreat(catalog, state)
    state = flow.retreat(catalog, state)
    assert current_question(catalog, state.cursor).id == "medicalTreatment"
    answers = record_answer(catalog, favourable_answers, "medicalTreatment", False)
    answers = record_answer(catalog, answers, "medicalTreatment", True)
    catalog, state = _drive(catalog, answers, state, steps=1)
    assert answers["medicalTreatment"] is True
    assert _ids(catalog).count("medicalTreatmentDate") == 1
    assert current_question(catalog, state.cursor).id == "medicalTreatmentDate"


def test_changed_answer_after_back_is_used_by_next_advance(catalog, favourable_answers):
    catalog, state = _drive(catalog, favourable_answers, steps=3)
    state = flow.retreat(catalog, flow.retreat(catalog, state))
    answers = record_answer(catalog, favourable_answers, "medicalTreatment", False)
    catalog, state = _drive(catalog, answers, state, steps=1)
    assert answers["medicalTreatment"] is False
    assert _ids(catalog).count("medicalTreatmentDate") == 1
    assert current_question(catalog, state.cursor).id == "medicalTreatmentDate"


def test_retreat_at_first_question_stays_put(catalog):
    assert flow.retreat(catalog, INITIAL_FLOW_STATE).cursor == 0


def test_retreat_from_early_exit_reopens_disqualifying_question(catalog, favourable_answers):
    answers = dict(favourable_answers, atFault=True)
    catalog, state = _drive(catalog, answers)
    reopened = flow.retreat(catalog, state)
    assert reopened.terminated is False
    assert reopened.verdict == Verdict.UNKNOWN
    assert current_question(catalog, reopened.cursor).id == "atFault"


def test_retreat_from_completion_reopens_last_question(catalog, favourable_answers):
    catalog, state = _drive(catalog, favourable_answers)
    reopened = flow.retreat(catalog, state)
    assert current_question(catalog, reopened.cursor).id == "insuranceCoverage"


def test_retreat_locked_once_submission_started(catalog, favourable_answers):
    catalog, state = _drive(catalog, favourable_answers)
    with pytest.raises(FlowLockedError):
        flow.retreat(catalog, state.evolve(submission_state=SubmissionState.SUBMITTED))


def test_progress_and_action_label(catalog):
    assert flow.progress(catalog, INITIAL_FLOW_STATE) == {"step": 1, "total": 7, "completed": False}
    assert flow.action_label(catalog, INITIAL_FLOW_STATE) == "Next"
    last = INITIAL_FLOW_STATE.evolve(cursor=len(catalog) - 1)
    assert flow.action_label(catalog, last) == "Submit"


def test_is_disqualifying_ignores_other_kinds(catalog):
    date_q = next(q for q in catalog if q.kind == QuestionKind.DATE)
    assert flow.is_disqualifying(date_q, True) is False
