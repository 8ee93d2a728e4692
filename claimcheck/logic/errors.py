"""Domain error taxonomy.

Every engine error carries a stable `code` token. The HTTP layer maps codes to
statuses via `claimcheck.http.error_mapping`; the engine itself never imports
web types.
"""

from __future__ import annotations

from typing import Optional


class ClaimCheckError(Exception):
    code = "CLAIMCHECK_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class QuestionValidationError(ClaimCheckError, ValueError):
    """Per-question validation failure; user-correctable."""

    code = "VALIDATION_FAILED"

    def __init__(self, question_id: str, message: str) -> None:
        super().__init__(message)
        self.question_id = question_id


# Short alias used by callers that think in terms of the taxonomy names
ValidationError = QuestionValidationError


class EvaluationError(ClaimCheckError):
    """Malformed date data met while evaluating qualification."""

    code = "EVALUATION_FAILED"

    def __init__(self, field: str, raw: object) -> None:
        super().__init__(f"malformed date in {field}: {raw!r}")
        self.field = field
        self.raw = raw


class SubmissionError(ClaimCheckError):
    """Lead-submission collaborator reported failure or raised."""

    code = "SUBMISSION_FAILED"

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.cause = cause


class CatalogError(ClaimCheckError):
    code = "CATALOG_CONFLICT"


class UnknownQuestionError(ClaimCheckError):
    code = "QUESTION_NOT_FOUND"

    def __init__(self, question_id: str) -> None:
        super().__init__(f"question not found: {question_id}")
        self.question_id = question_id


class SessionNotFoundError(ClaimCheckError):
    code = "SESSION_NOT_FOUND"

    def __init__(self, session_id: str) -> None:
        super().__init__(f"session not found: {session_id}")
        self.session_id = session_id


class FlowTerminatedError(ClaimCheckError):
    code = "FLOW_TERMINATED"


class FlowIncompleteError(ClaimCheckError):
    code = "FLOW_INCOMPLETE"


class FlowLockedError(ClaimCheckError):
    code = "FLOW_LOCKED"


class SubmissionInFlightError(ClaimCheckError):
    code = "SUBMISSION_IN_FLIGHT"


class AlreadySubmittedError(ClaimCheckError):
    code = "ALREADY_SUBMITTED"


__all__ = [
    "ClaimCheckError",
    "QuestionValidationError",
    "ValidationError",
    "EvaluationError",
    "SubmissionError",
    "CatalogError",
    "UnknownQuestionError",
    "SessionNotFoundError",
    "FlowTerminatedError",
    "FlowIncompleteError",
    "FlowLockedError",
    "SubmissionInFlightError",
    "AlreadySubmittedError",
]
