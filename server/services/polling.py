"""
Polling service layer

Builds API payloads from a store snapshot and the opinions engine.
Stats are recomputed from the full response set on every call.
"""

from typing import Any, Dict, List, Optional

from config import get_logger
from database.models import Question, Response
from database.store import SessionStore
from opinions import (
    CARD_POLICY,
    QuestionStats,
    classify_distance,
    collect_tags,
    compute_distance,
    compute_group_stats,
    compute_question_stats,
    filter_by_tags,
    scatter_points,
    sort_questions,
)
from server.metrics import metrics

logger = get_logger(__name__).bind(component="polling_service")


def _distance_payload(
    response: Optional[Response], stats: Optional[QuestionStats], policy: str
) -> Optional[Dict[str, Any]]:
    if response is None or stats is None:
        return None
    distance = compute_distance(response, stats)
    return {
        "value": distance,
        "policy": policy,
        "tier": classify_distance(distance, policy=policy).to_dict(),
    }


def list_questions(
    store: SessionStore,
    participant_id: Optional[str],
    tags: Optional[List[str]] = None,
    sort_by: str = "date",
) -> Dict[str, Any]:
    """Question list with per-question stats and the caller's distance

    Distances on the list use the card policy.

    Returns:
        {"questions": [...], "tags": [...all tags...]}
    """
    questions, responses_by_question = store.snapshot()

    with metrics.stats_duration.labels(scope="list").time():
        stats_by_id = {
            q.id: compute_question_stats(responses_by_question.get(q.id, []))
            for q in questions
        }
        filtered = filter_by_tags(questions, tags)
        ordered = sort_questions(filtered, sort_by, stats_by_id.get)

    items = []
    for question in ordered:
        responses = responses_by_question.get(question.id, [])
        stats = stats_by_id[question.id]
        user_response = _find_response(responses, participant_id)

        item = question.to_dict()
        item.update({
            "response_count": len(responses),
            "stats": stats.to_dict() if stats else None,
            "answered": user_response is not None,
            "is_creator": participant_id is not None and question.created_by == participant_id,
            "distance": _distance_payload(user_response, stats, CARD_POLICY),
        })
        items.append(item)

    return {"questions": items, "tags": collect_tags(questions)}


def question_results(
    store: SessionStore,
    question: Question,
    participant_id: Optional[str],
    policy: str = CARD_POLICY,
) -> Dict[str, Any]:
    """Result detail for one question

    Includes stats, response count, the caller's own response and
    distance (classified with the requested policy) and scatter points.
    """
    responses = store.get_responses(question.id)

    with metrics.stats_duration.labels(scope="results").time():
        stats = compute_question_stats(responses)

    user_response = _find_response(responses, participant_id)

    return {
        "question": question.to_dict(),
        "response_count": len(responses),
        "stats": stats.to_dict() if stats else None,
        "my_response": user_response.to_dict() if user_response else None,
        "distance": _distance_payload(user_response, stats, policy),
        "points": scatter_points(responses, stats, participant_id),
    }


def group_summary(
    store: SessionStore,
    participant_id: Optional[str],
    tags: Optional[List[str]] = None,
) -> Optional[Dict[str, Any]]:
    """Group cohesion and the caller's alignment over the filtered questions

    Returns:
        GroupStats dict, or None when no filtered question has responses
    """
    questions, responses_by_question = store.snapshot()
    filtered = filter_by_tags(questions, tags)

    with metrics.stats_duration.labels(scope="group").time():
        group = compute_group_stats(
            filtered,
            lambda question_id: responses_by_question.get(question_id, []),
            participant_id,
        )

    if group is None:
        logger.debug("no answered questions for group stats", tags=tags)
        return None
    return group.to_dict()


def _find_response(responses: List[Response], participant_id: Optional[str]) -> Optional[Response]:
    if participant_id is None:
        return None
    for response in responses:
        if response.author_id == participant_id:
            return response
    return None
