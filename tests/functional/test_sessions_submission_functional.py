"""Functional tests for sessions and the contact submission lifecycle."""

from __future__ import annotations

import anyio
import pytest

from _support import RecordingSubmitter
from claimcheck.logic import events
from claimcheck.logic.errors import (
    AlreadySubmittedError,
    FlowIncompleteError,
    FlowLockedError,
    FlowTerminatedError,
    QuestionValidationError,
    SessionNotFoundError,
    SubmissionInFlightError,
)
from claimcheck.logic.repository_leads import list_leads
from claimcheck.logic.sessions import close_session, get_session, open_session
from claimcheck.logic.submission import DatabaseLeadSubmitter, submit_contact
from claimcheck.models.contact import ContactInfo
from claimcheck.models.flow import SubmissionState, Verdict

CONTACT = ContactInfo(full_name="Jordan Reyes", phone="(555) 123-4567", csrf_token="tok")


def _complete(session, answers):
    while not session.state.terminated:
        q = session.current_question()
        if q.id in answers:
            session.answer(q.id, answers[q.id])
        session.next()


@pytest.fixture
def session(clock):
    return open_session(clock=clock)


def test_open_and_lookup_session(session):
    assert get_session(session.session_id) is session
    assert events.EVENT_BUFFER[-1]["type"] == events.SESSION_STARTED
    close_session(session.session_id)
    with pytest.raises(SessionNotFoundError):
        get_session(session.session_id)


def test_validation_failure_records_field_error(session):
    with pytest.raises(QuestionValidationError):
        session.next()
    assert session.snapshot.validation_error.question_id == "accidentDate"
    assert session.state.cursor == 0
    session.answer("accidentDate", "2026-05-01")
    assert session.snapshot.validation_error is None


def test_completed_session_rejects_answers(session, favourable_answers):
    _complete(session, favourable_answers)
    assert session.state.verdict == Verdict.QUALIFIED
    with pytest.raises(FlowTerminatedError):
        session.answer("atFault", True)
    assert any(e["type"] == events.QUALIFICATION_EVALUATED for e in events.EVENT_BUFFER)


def test_restart_resets_everything(session, favourable_answers):
    _complete(session, favourable_answers)
    session.restart()
    assert session.state.cursor == 0
    assert session.state.verdict == Verdict.UNKNOWN
    assert dict(session.answers) == {}
    assert len(session.catalog) == 7
    assert events.EVENT_BUFFER[-1]["type"] == events.SESSION_RESTARTED


def test_submit_before_completion_is_rejected(session):
    with pytest.raises(FlowIncompleteError):
        anyio.run(submit_contact, session, CONTACT, RecordingSubmitter())


def test_successful_submission(session, favourable_answers):
    _complete(session, favourable_answers)
    submitter = RecordingSubmitter()
    state = anyio.run(submit_contact, session, CONTACT, submitter)
    assert state.submission_state == SubmissionState.SUBMITTED
    assert len(submitter.calls) == 1
    assert submitter.calls[0]["answers"]["accidentDate"] == favourable_answers["accidentDate"]
    assert submitter.calls[0]["is_test_mode"] is False
    published = events.EVENT_BUFFER[-1]
    assert published["type"] == events.LEAD_SUBMITTED
    assert published["payload"]["reference"] == "lead-1"
    with pytest.raises(AlreadySubmittedError):
        anyio.run(submit_contact, session, CONTACT, submitter)
    with pytest.raises(FlowLockedError):
        session.back()


def test_failed_submission_then_retry(session, favourable_answers):
    _complete(session, favourable_answers)
    failing = RecordingSubmitter(raises=RuntimeError("upstream down"))
    state = anyio.run(submit_contact, session, CONTACT, failing)
    assert state.submission_state == SubmissionState.FAILED
    assert state.advisory == "submission_failed"
    assert events.EVENT_BUFFER[-1]["type"] == events.LEAD_SUBMISSION_FAILED

    state = anyio.run(submit_contact, session, CONTACT, RecordingSubmitter())
    assert state.submission_state == SubmissionState.SUBMITTED
    assert state.advisory is None


def test_reported_error_outcome_counts_as_failure(session, favourable_answers):
    _complete(session, favourable_answers)
    rejecting = RecordingSubmitter(outcome={"status": "error", "message": "rejected"})
    state = anyio.run(submit_contact, session, CONTACT, rejecting)
    assert state.submission_state == SubmissionState.FAILED


def test_second_submission_while_in_flight_is_rejected(session, favourable_answers):
    _complete(session, favourable_answers)

    async def scenario():
        release = anyio.Event()
        entered = anyio.Event()

        async def slow(answers, contact, is_test_mode):
            entered.set()
            await release.wait()
            return {"status": "ok", "message": "slow-1"}

        results = {}

        async def first():
            results["state"] = await submit_contact(session, CONTACT, slow)

        async with anyio.create_task_group() as tg:
            tg.start_soon(first)
            await entered.wait()
            assert session.state.submission_state == SubmissionState.SUBMITTING
            with pytest.raises(SubmissionInFlightError):
                await submit_contact(session, CONTACT, RecordingSubmitter())
            with pytest.raises(FlowLockedError):
                session.restart()
            release.set()
        return results["state"]

    state = anyio.run(scenario)
    assert state.submission_state == SubmissionState.SUBMITTED


def test_disqualified_session_may_submit_simplified_contact(session, favourable_answers):
    _complete(session, dict(favourable_answers, priorSettlement=True))
    assert session.state.verdict == Verdict.DISQUALIFIED
    anyio.run(submit_contact, session, CONTACT, RecordingSubmitter())
    assert events.EVENT_BUFFER[-1]["payload"]["simplified"] is True


def test_database_submitter_persists_lead(session, favourable_answers):
    _complete(session, favourable_answers)
    state = anyio.run(submit_contact, session, CONTACT, DatabaseLeadSubmitter())
    assert state.submission_state == SubmissionState.SUBMITTED
    leads = list_leads()
    assert len(leads) == 1
    assert leads[0]["contact"]["full_name"] == "Jordan Reyes"
    assert "csrf_token" not in leads[0]["contact"]
    assert leads[0]["answers"]["medicalTreatment"] is True


def test_database_failure_is_absorbed(session, favourable_answers, mocker):
    _complete(session, favourable_answers)
    mocker.patch("claimcheck.logic.submission.insert_lead", side_effect=RuntimeError("db down"))
    state = anyio.run(submit_contact, session, CONTACT, DatabaseLeadSubmitter())
    assert state.submission_state == SubmissionState.FAILED


@pytest.mark.parametrize(
    "kwargs",
    [
        {"full_name": "  ", "phone": "5551234567"},
        {"full_name": "A", "phone": "555-1234"},
        {"full_name": "A"},
        {"full_name": "A", "phone": "5551234567", "preferred_contact": "email"},
        {"full_name": "A", "email": "nobody"},
    ],
)
def test_contact_info_rejects_bad_input(kwargs):
    from pydantic import ValidationError

    with pytest.raises(ValidationError):
        ContactInfo(**kwargs)
