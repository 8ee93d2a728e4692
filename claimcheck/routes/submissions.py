"""Contact submission endpoint.

This is the contact-capture collaborator's `onSubmit`: it hands the contact
details to the lead submitter and reports the settled session view. A failed
submission is not an HTTP error; the view carries the retry affordance.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from claimcheck.config import AppConfig
from claimcheck.logic.screen_builder import assemble_session_view
from claimcheck.logic.sessions import get_session
from claimcheck.logic.submission import LeadSubmitter, submit_contact
from claimcheck.models.contact import ContactInfo
from claimcheck.models.response_types import SessionView
from claimcheck.routes.dependencies import get_app_config, get_lead_submitter

router = APIRouter()


@router.post(
    "/sessions/{session_id}/submission",
    response_model=SessionView,
    summary="Submit contact details for a completed evaluation",
)
async def submit_session_contact(
    session_id: str,
    contact: ContactInfo,
    config: AppConfig = Depends(get_app_config),
    submitter: LeadSubmitter = Depends(get_lead_submitter),
) -> SessionView:
    session = get_session(session_id)
    await submit_contact(session, contact, submitter, is_test_mode=config.submission.test_mode)
    return assemble_session_view(session)


__all__ = ["router", "submit_session_contact"]
