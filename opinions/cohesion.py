"""Group cohesion and user alignment

Aggregates per-question controversy across every answered question into
a single cohesion score, and the current user's per-question distances
into a single alignment score.

Algorithm:
1. Keep questions with at least one response ("answered"); none -> None
2. Cohesion = mean std_dev_global over answered questions
3. Keep answered questions the user responded to ("user-answered")
4. Alignment = mean distance to the question mean over user-answered
   questions; None when the user answered nothing
"""

from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional

import numpy as np

from config import get_logger
from exceptions import MalformedCollectionError
from opinions.distance import classify_distance, compute_distance
from opinions.statistics import compute_question_stats, read_field
from opinions.tiers import (
    ALIGNMENT_POLICY,
    COHESION_TIERS,
    WEAK_COHESION_TIER,
    Tier,
    tier_below,
)

logger = get_logger(__name__).bind(component="group_cohesion")


@dataclass(frozen=True)
class GroupStats:
    """Group-level cohesion and the current user's alignment"""

    avg_std_dev: float
    cohesion: Tier
    avg_distance: Optional[float]
    alignment: Optional[Tier]
    total_questions: int
    user_answered: int

    def to_dict(self) -> dict:
        return {
            "avg_std_dev": self.avg_std_dev,
            "cohesion": self.cohesion.key,
            "cohesion_tier": self.cohesion.to_dict(),
            "avg_distance": self.avg_distance,
            "alignment": self.alignment.key if self.alignment else None,
            "alignment_tier": self.alignment.to_dict() if self.alignment else None,
            "total_questions": self.total_questions,
            "user_answered": self.user_answered,
        }


def classify_cohesion(avg_std_dev: float) -> Tier:
    """< 10 very_strong, < 20 strong, < 30 moderate, else weak"""
    return tier_below(avg_std_dev, COHESION_TIERS, WEAK_COHESION_TIER)


def compute_group_stats(
    questions: Iterable[Any],
    responses_by_question: Callable[[Any], List[Any]],
    current_user_id: Optional[str],
) -> Optional[GroupStats]:
    """Compute cohesion and alignment across a set of questions

    Args:
        questions: Questions to aggregate over (objects or mappings with id)
        responses_by_question: Callable returning all responses for a question id
        current_user_id: Opaque author key of the viewing participant

    Returns:
        GroupStats, or None when no question has a response
    """
    if questions is None or isinstance(questions, (str, bytes)):
        raise MalformedCollectionError("Expected a collection of questions", collection="questions")
    try:
        question_list = list(questions)
    except TypeError:
        raise MalformedCollectionError(
            "Expected a collection of questions", collection="questions"
        ) from None

    std_devs = []
    distances = []

    for index, question in enumerate(question_list):
        question_id = read_field(question, "id")
        if question_id is None:
            raise MalformedCollectionError(
                "Question is missing an id", collection="questions", index=index
            )

        responses = responses_by_question(question_id)
        if responses is None:
            raise MalformedCollectionError(
                "No response collection for question",
                collection="responses_by_question",
                index=index,
            )
        responses = list(responses)
        stats = compute_question_stats(responses)
        if stats is None:
            continue
        std_devs.append(stats.std_dev_global)

        if current_user_id is None:
            continue
        user_response = _find_user_response(responses, current_user_id)
        if user_response is not None:
            distances.append(compute_distance(user_response, stats))

    if not std_devs:
        return None

    avg_std_dev = float(np.mean(std_devs))

    avg_distance = None
    alignment = None
    if distances:
        avg_distance = float(np.mean(distances))
        alignment = classify_distance(avg_distance, policy=ALIGNMENT_POLICY)

    logger.debug(
        "computed group stats",
        answered=len(std_devs),
        user_answered=len(distances),
        avg_std_dev=round(avg_std_dev, 2),
    )

    return GroupStats(
        avg_std_dev=avg_std_dev,
        cohesion=classify_cohesion(avg_std_dev),
        avg_distance=avg_distance,
        alignment=alignment,
        total_questions=len(std_devs),
        user_answered=len(distances),
    )


def _find_user_response(responses: Iterable[Any], user_id: str) -> Optional[Any]:
    for response in responses:
        if read_field(response, "author_id") == user_id:
            return response
    return None
