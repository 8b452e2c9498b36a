"""Per-question statistics

Turns one question's response set into aggregate metrics:

1. Population mean of agreement and importance (divide by N)
2. Population standard deviation of each dimension (divide by N)
3. Global standard deviation = mean of the two per-dimension deviations
   (not a pooled variance)
4. Controversy tier from the global standard deviation

Stats are derived, never stored: callers recompute from the full
response set whenever it changes.
"""

import numbers
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Tuple

import numpy as np

from config import get_logger
from exceptions import MalformedCollectionError
from opinions.tiers import CONSENSUS_TIER, CONTROVERSY_TIERS, Tier, tier_above

logger = get_logger(__name__).bind(component="question_stats")


@dataclass(frozen=True)
class QuestionStats:
    """Aggregate metrics for one question's responses"""

    avg_agreement: float
    avg_importance: float
    std_dev_agreement: float
    std_dev_importance: float
    std_dev_global: float
    controversy: Tier
    response_count: int

    def to_dict(self) -> dict:
        return {
            "avg_agreement": self.avg_agreement,
            "avg_importance": self.avg_importance,
            "std_dev_agreement": self.std_dev_agreement,
            "std_dev_importance": self.std_dev_importance,
            "std_dev_global": self.std_dev_global,
            "controversy": self.controversy.key,
            "controversy_tier": self.controversy.to_dict(),
            "response_count": self.response_count,
        }


def classify_controversy(std_dev_global: float) -> Tier:
    """Map a global standard deviation to its controversy tier

    Thresholds are strict: > 30 very_controversial, > 20 controversial,
    > 10 mixed, otherwise consensus.
    """
    return tier_above(std_dev_global, CONTROVERSY_TIERS, CONSENSUS_TIER)


def compute_question_stats(responses: Iterable[Any]) -> Optional[QuestionStats]:
    """Compute aggregate metrics for one question's responses

    Args:
        responses: Every response for a single question. Elements may be
                   objects or mappings exposing agreement and importance.

    Returns:
        QuestionStats, or None when there are no responses.

    Raises:
        MalformedCollectionError: responses is not a collection of
            numeric agreement/importance pairs for a single question
    """
    points = response_points(responses, collection="responses")
    if not points:
        return None

    matrix = np.asarray(points, dtype=float)
    means = matrix.mean(axis=0)
    std_devs = matrix.std(axis=0)  # ddof=0: population estimator

    std_dev_agreement = float(std_devs[0])
    std_dev_importance = float(std_devs[1])
    std_dev_global = (std_dev_agreement + std_dev_importance) / 2

    return QuestionStats(
        avg_agreement=float(means[0]),
        avg_importance=float(means[1]),
        std_dev_agreement=std_dev_agreement,
        std_dev_importance=std_dev_importance,
        std_dev_global=std_dev_global,
        controversy=classify_controversy(std_dev_global),
        response_count=len(points),
    )


def response_points(responses: Iterable[Any], collection: str) -> List[Tuple[float, float]]:
    """Extract (agreement, importance) pairs, failing fast on bad shapes"""
    if responses is None or isinstance(responses, (str, bytes)):
        raise MalformedCollectionError(
            "Expected a collection of responses", collection=collection
        )
    try:
        items = list(responses)
    except TypeError:
        raise MalformedCollectionError(
            "Expected a collection of responses", collection=collection
        ) from None

    points = []
    question_id = None
    for index, response in enumerate(items):
        agreement = _numeric_field(response, "agreement", collection, index)
        importance = _numeric_field(response, "importance", collection, index)

        rid = read_field(response, "question_id")
        if rid is not None:
            if question_id is None:
                question_id = rid
            elif rid != question_id:
                logger.warning(
                    "responses span several questions",
                    collection=collection,
                    index=index,
                )
                raise MalformedCollectionError(
                    "Responses belong to more than one question",
                    collection=collection,
                    index=index,
                )

        points.append((agreement, importance))

    return points


def read_field(item: Any, name: str) -> Any:
    """Read a field from either a mapping or an object"""
    if isinstance(item, dict):
        return item.get(name)
    return getattr(item, name, None)


def _numeric_field(response: Any, name: str, collection: str, index: int) -> float:
    value = read_field(response, name)
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise MalformedCollectionError(
            f"Response is missing a numeric {name}",
            collection=collection,
            index=index,
        )
    value = float(value)
    if not np.isfinite(value):
        raise MalformedCollectionError(
            f"Response has a non-finite {name}",
            collection=collection,
            index=index,
        )
    return value
