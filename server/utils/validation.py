"""Input sanitization and existence checks for API routes."""

import re

from fastapi import HTTPException, status

from database.models import Question
from database.store import SessionStore
from exceptions import (
    PermissionDeniedError,
    QuestionNotFoundError,
    SondageError,
    ValidationError,
)

# Control characters other than tab/newline, and markup delimiters
UNSAFE_CHARS = re.compile(r"[\x00-\x08\x0b-\x1f\x7f<>]")


def sanitize_string(value: str) -> str:
    """Strip control characters and markup delimiters from free text"""
    if not value:
        return ""
    return UNSAFE_CHARS.sub("", value).strip()


def require_question(store: SessionStore, question_id: str) -> Question:
    """Get question or raise 404."""
    question = store.get_question(question_id)
    if not question:
        raise HTTPException(status_code=404, detail="Question not found")
    return question


def to_http_error(error: SondageError) -> HTTPException:
    """Map a domain error onto the matching HTTP error

    QuestionNotFoundError -> 404, PermissionDeniedError -> 403,
    ValidationError -> 400, anything else -> 500.
    """
    if isinstance(error, QuestionNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Question not found")
    if isinstance(error, PermissionDeniedError):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(error.args[0]))
    if isinstance(error, ValidationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error.args[0]))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal error")
