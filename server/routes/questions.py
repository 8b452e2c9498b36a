"""Questions API - questions, responses and per-question results

Endpoints:
- List questions with stats (tag filter, sort by date/importance/controversy)
- Submit, edit and delete questions (edit/delete by creator only)
- Submit or update the caller's response
- View result detail for one question
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from config import get_logger
from database.store import SessionStore
from exceptions import SondageError
from opinions import CARD_POLICY, DISTANCE_POLICIES, SORT_KEYS
from server.dependencies import get_optional_participant_id, get_participant_id, get_store
from server.metrics import metrics
from server.models.requests import (
    QuestionCreateRequest,
    QuestionUpdateRequest,
    ResponseSubmitRequest,
)
from server.services.polling import list_questions, question_results
from server.utils.responses import list_response, success_response
from server.utils.validation import require_question, to_http_error

logger = get_logger(__name__).bind(component="questions_api")

router = APIRouter(prefix="/api/v1/questions", tags=["questions"])

SORT_PATTERN = "^(" + "|".join(SORT_KEYS) + ")$"
POLICY_PATTERN = "^(" + "|".join(sorted(DISTANCE_POLICIES)) + ")$"


def _http_error(error: SondageError, component: str = "store") -> HTTPException:
    metrics.record_error(component, error)
    return to_http_error(error)


# -----------------------------------------------------------------------------
# Questions
# -----------------------------------------------------------------------------


@router.get("")
async def get_questions(
    tags: Optional[List[str]] = Query(None),
    sort: str = Query("date", pattern=SORT_PATTERN),
    participant_id: Optional[str] = Depends(get_optional_participant_id),
    store: SessionStore = Depends(get_store),
):
    """List questions with stats and the caller's distance to each mean.

    Tag filter keeps questions sharing at least one tag. Questions with
    no responses sort last for importance/controversy ordering.
    """
    payload = list_questions(store, participant_id, tags=tags, sort_by=sort)
    return list_response(payload["questions"], key="questions", tags=payload["tags"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_question(
    body: QuestionCreateRequest,
    participant_id: str = Depends(get_participant_id),
    store: SessionStore = Depends(get_store),
):
    """Submit a new question owned by the caller."""
    try:
        question = store.create_question(body.text, participant_id, body.tags)
    except SondageError as e:
        raise _http_error(e) from e

    metrics.question_events.labels(action="created").inc()
    metrics.update_store_size(store.get_stats())
    return success_response({"question": question.to_dict()})


@router.get("/{question_id}")
async def get_question(
    question_id: str,
    store: SessionStore = Depends(get_store),
):
    """Get a single question."""
    question = require_question(store, question_id)
    return success_response({"question": question.to_dict()})


@router.patch("/{question_id}")
async def update_question(
    question_id: str,
    body: QuestionUpdateRequest,
    participant_id: str = Depends(get_participant_id),
    store: SessionStore = Depends(get_store),
):
    """Edit text and/or tags. Creator only."""
    if body.text is None and body.tags is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Nothing to update",
        )

    try:
        question = store.update_question(
            question_id, participant_id, text=body.text, tags=body.tags
        )
    except SondageError as e:
        raise _http_error(e) from e

    metrics.question_events.labels(action="edited").inc()
    return success_response({"question": question.to_dict()})


@router.delete("/{question_id}")
async def delete_question(
    question_id: str,
    participant_id: str = Depends(get_participant_id),
    store: SessionStore = Depends(get_store),
):
    """Delete a question and all of its responses. Creator only."""
    try:
        removed = store.delete_question(question_id, participant_id)
    except SondageError as e:
        raise _http_error(e) from e

    metrics.question_events.labels(action="deleted").inc()
    metrics.responses_cascaded.inc(removed)
    metrics.update_store_size(store.get_stats())
    return success_response({"deleted": question_id, "responses_removed": removed})


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------


@router.put("/{question_id}/responses")
async def submit_response(
    question_id: str,
    body: ResponseSubmitRequest,
    participant_id: str = Depends(get_participant_id),
    store: SessionStore = Depends(get_store),
):
    """Submit or update the caller's response.

    A second submission for the same question replaces agreement and
    importance in place; the response keeps its id and created_at.
    """
    try:
        response, created = store.submit_response(
            question_id, participant_id, body.agreement, body.importance
        )
    except SondageError as e:
        raise _http_error(e) from e

    outcome = "created" if created else "updated"
    metrics.responses_submitted.labels(outcome=outcome).inc()
    metrics.update_store_size(store.get_stats())
    logger.info("recorded response", question_id=question_id, outcome=outcome)

    return success_response({"response": response.to_dict(), "created": created})


@router.get("/{question_id}/responses/me")
async def get_my_response(
    question_id: str,
    participant_id: str = Depends(get_participant_id),
    store: SessionStore = Depends(get_store),
):
    """The caller's response to a question, or null."""
    require_question(store, question_id)
    response = store.get_response(question_id, participant_id)
    return success_response({"response": response.to_dict() if response else None})


# -----------------------------------------------------------------------------
# Results
# -----------------------------------------------------------------------------


@router.get("/{question_id}/results")
async def get_results(
    question_id: str,
    policy: str = Query(CARD_POLICY, pattern=POLICY_PATTERN),
    participant_id: Optional[str] = Depends(get_optional_participant_id),
    store: SessionStore = Depends(get_store),
):
    """Result detail for one question.

    stats is null until the question has a response. distance is null
    unless the caller has responded.
    """
    question = require_question(store, question_id)
    return success_response(question_results(store, question, participant_id, policy=policy))
