"""Pydantic models for API request and response bodies."""

from __future__ import annotations

from typing import Any, Dict, List, Optional
from pydantic import BaseModel


class AnswerPayload(BaseModel):
    value: Any = None


class OptionView(BaseModel):
    value: Any
    label: str
    selected: bool = False


class InputView(BaseModel):
    """Affordance the display should render for a question."""

    widget: str
    max: Optional[str] = None
    options: List[OptionView] = []


class QuestionView(BaseModel):
    id: str
    prompt: str
    help_text: Optional[str] = None
    kind: str
    input: InputView
    action_label: str
    can_go_back: bool


class ValidationErrorView(BaseModel):
    question_id: str
    message: str


class ProgressView(BaseModel):
    step: int
    total: int
    completed: bool


class FlowStateView(BaseModel):
    cursor: int
    verdict: str
    terminated: bool
    submission_state: str
    advisory: Optional[str] = None


class ResourceLink(BaseModel):
    title: str
    href: str


class ResultViewModel(BaseModel):
    action: str
    title: Optional[str] = None
    message: Optional[str] = None
    advisory: Optional[str] = None
    advisory_message: Optional[str] = None
    allow_contact: bool = False
    simplified_contact: bool = False
    allow_restart: bool = False
    allow_retry: bool = False
    resources: List[ResourceLink] = []
    next_steps: List[str] = []


class SessionView(BaseModel):
    session_id: str
    state: FlowStateView
    progress: ProgressView
    question: Optional[QuestionView] = None
    answers: Dict[str, Any]
    validation_error: Optional[ValidationErrorView] = None
    result: Optional[ResultViewModel] = None


__all__ = [
    "AnswerPayload",
    "OptionView",
    "InputView",
    "QuestionView",
    "ValidationErrorView",
    "ProgressView",
    "FlowStateView",
    "ResourceLink",
    "ResultViewModel",
    "SessionView",
]
