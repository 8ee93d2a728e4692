"""Functional tests for result dispatch."""

from __future__ import annotations

import pytest

from claimcheck.logic.dispatcher import (
    ADVISORY_SUBMISSION_FAILED,
    RESOURCES,
    ResultAction,
    dispatch,
)
from claimcheck.logic.qualification import ADVISORY_PROCESSING_ERROR, PROCESSING_ERROR_MESSAGE
from claimcheck.models.flow import INITIAL_FLOW_STATE, SubmissionState, Verdict

ENDED = INITIAL_FLOW_STATE.evolve(cursor=7, terminated=True)


@pytest.mark.parametrize(
    "verdict,submission,action",
    [
        (Verdict.QUALIFIED, SubmissionState.NOT_SUBMITTED, ResultAction.PRESENT_CONTACT_CAPTURE),
        (Verdict.DISQUALIFIED, SubmissionState.NOT_SUBMITTED, ResultAction.SHOW_DISQUALIFIED),
        (Verdict.QUALIFIED, SubmissionState.SUBMITTING, ResultAction.SHOW_BUSY),
        (Verdict.DISQUALIFIED, SubmissionState.SUBMITTING, ResultAction.SHOW_BUSY),
        (Verdict.QUALIFIED, SubmissionState.SUBMITTED, ResultAction.SHOW_CONFIRMATION),
        (Verdict.DISQUALIFIED, SubmissionState.SUBMITTED, ResultAction.SHOW_CONFIRMATION),
        (Verdict.QUALIFIED, SubmissionState.FAILED, ResultAction.SHOW_RETRYABLE_ERROR),
        (Verdict.DISQUALIFIED, SubmissionState.FAILED, ResultAction.SHOW_RETRYABLE_ERROR),
    ],
)
def test_decision_table(verdict, submission, action):
    view = dispatch(ENDED.evolve(verdict=verdict, submission_state=submission))
    assert view.action == action


def test_in_progress_flow_shows_question():
    assert dispatch(INITIAL_FLOW_STATE).action == ResultAction.SHOW_QUESTION


def test_disqualified_view_offers_resources_and_simplified_contact():
    view = dispatch(ENDED.evolve(verdict=Verdict.DISQUALIFIED))
    assert view.simplified_contact is True
    assert view.allow_restart is True
    assert [r["href"] for r in view.resources] == [href for _, href in RESOURCES]


def test_processing_error_advisory_is_surfaced():
    view = dispatch(ENDED.evolve(verdict=Verdict.DISQUALIFIED, advisory=ADVISORY_PROCESSING_ERROR))
    assert view.advisory == ADVISORY_PROCESSING_ERROR
    assert view.advisory_message == PROCESSING_ERROR_MESSAGE


def test_failed_submission_allows_retry():
    view = dispatch(
        ENDED.evolve(
            verdict=Verdict.QUALIFIED,
            submission_state=SubmissionState.FAILED,
            advisory=ADVISORY_SUBMISSION_FAILED,
        )
    )
    assert view.allow_retry is True
    assert view.allow_contact is True
    assert view.simplified_contact is False
    assert view.advisory == ADVISORY_SUBMISSION_FAILED


def test_confirmation_lists_next_steps():
    view = dispatch(ENDED.evolve(verdict=Verdict.QUALIFIED, submission_state=SubmissionState.SUBMITTED))
    assert len(view.next_steps) == 3
    assert view.allow_contact is False
