"""Questionnaire session endpoints.

Each endpoint performs exactly one engine action and returns the refreshed
session view. Domain errors propagate to the problem+json handlers.
"""

from __future__ import annotations

from datetime import date
from typing import Callable

from fastapi import APIRouter, Depends, Response
import logging

from claimcheck.config import AppConfig
from claimcheck.logic.screen_builder import assemble_session_view
from claimcheck.logic.sessions import close_session, get_session, open_session
from claimcheck.models.response_types import AnswerPayload, SessionView
from claimcheck.routes.dependencies import get_app_config, get_clock

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/sessions", status_code=201, response_model=SessionView, summary="Start a qualification session")
async def create_session(
    config: AppConfig = Depends(get_app_config),
    clock: Callable[[], date] = Depends(get_clock),
) -> SessionView:
    session = open_session(config=config.qualification, clock=clock)
    logger.info("session_created session_id=%s", session.session_id)
    return assemble_session_view(session)


@router.get("/sessions/{session_id}", response_model=SessionView, summary="Current question or result")
async def read_session(session_id: str) -> SessionView:
    return assemble_session_view(get_session(session_id))


@router.put(
    "/sessions/{session_id}/answers/{question_id}",
    response_model=SessionView,
    summary="Record the raw answer for a question",
)
async def put_answer(session_id: str, question_id: str, payload: AnswerPayload) -> SessionView:
    session = get_session(session_id)
    session.answer(question_id, payload.value)
    return assemble_session_view(session)


@router.post("/sessions/{session_id}/next", response_model=SessionView, summary="Validate and advance")
async def next_question(session_id: str) -> SessionView:
    session = get_session(session_id)
    session.next()
    return assemble_session_view(session)


@router.post("/sessions/{session_id}/back", response_model=SessionView, summary="Go back one question")
async def previous_question(session_id: str) -> SessionView:
    session = get_session(session_id)
    session.back()
    return assemble_session_view(session)


@router.post("/sessions/{session_id}/restart", response_model=SessionView, summary="Start a new evaluation")
async def restart_session(session_id: str) -> SessionView:
    session = get_session(session_id)
    session.restart()
    return assemble_session_view(session)


@router.delete("/sessions/{session_id}", status_code=204, summary="Discard a session")
async def delete_session(session_id: str) -> Response:
    close_session(session_id)
    return Response(status_code=204)


__all__ = [
    "router",
    "create_session",
    "read_session",
    "put_answer",
    "next_question",
    "previous_question",
    "restart_session",
    "delete_session",
]
