"""Functional test bootstrap.

Points the service at a shared in-memory SQLite database before any
`claimcheck` import resolves configuration, pins "today" so date rules are
deterministic, and resets in-memory sessions and events between tests.
"""

from __future__ import annotations

import os
from datetime import date, timedelta
from typing import Any, Dict

import pytest

from _support import TODAY, RecordingSubmitter

os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ.pop("TEST_DATABASE_URL", None)
os.environ["AUTO_APPLY_MIGRATIONS"] = "1"
os.environ.pop("CLAIMCHECK_TEST_MODE", None)


@pytest.fixture(scope="session", autouse=True)
def sqlite_schema() -> None:
    """Apply migrations once to the shared in-memory engine."""
    from claimcheck.db.base import get_engine
    from claimcheck.db.migrations_runner import apply_migrations

    apply_migrations(get_engine(os.environ["DATABASE_URL"]))
    yield


@pytest.fixture(autouse=True)
def clean_state() -> None:
    from claimcheck.logic import events, inmemory_state
    from claimcheck.logic.repository_leads import delete_all_leads

    inmemory_state.clear_all()
    events.EVENT_BUFFER.clear()
    delete_all_leads()
    yield
    inmemory_state.clear_all()
    events.EVENT_BUFFER.clear()


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def clock():
    return lambda: TODAY


@pytest.fixture
def favourable_answers() -> Dict[str, Any]:
    """Answers satisfying every criterion (accident 200 days ago, treated 30 days later)."""
    accident = TODAY - timedelta(days=200)
    return {
        "accidentDate": accident.isoformat(),
        "medicalTreatment": True,
        "medicalTreatmentDate": (accident + timedelta(days=30)).isoformat(),
        "atFault": False,
        "hasAttorney": "no",
        "movingViolation": False,
        "priorSettlement": False,
        "insuranceCoverage": {"liability": True, "uninsured": False, "underinsured": False},
    }


@pytest.fixture
def recording_submitter() -> RecordingSubmitter:
    return RecordingSubmitter()


@pytest.fixture
def app(clock):
    from claimcheck.main import create_app

    application = create_app()
    application.state.clock = clock
    return application


@pytest.fixture
def client(app):
    from fastapi.testclient import TestClient

    with TestClient(app) as c:
        yield c
