"""Individual-vs-group distance

Euclidean distance in the (agreement, importance) plane between one
response and the question's mean point. Used as a proxy for how
mainstream or atypical a respondent's view is.

Two classification policies exist and are intentionally kept apart:
- "card": bands < 10, < 25, < 40, else (question list cards)
- "alignment": bands < 10, < 20, < 30, else (group alignment readout)
"""

from typing import Any, Optional

import numpy as np

from exceptions import MalformedCollectionError
from opinions.statistics import QuestionStats, read_field
from opinions.tiers import CARD_POLICY, Tier, get_distance_policy, tier_below


def compute_distance(response: Any, stats: Optional[QuestionStats]) -> float:
    """Distance between a response and the question mean

    Args:
        response: Object or mapping exposing agreement and importance
        stats: Stats for the response's question, or None

    Returns:
        Euclidean distance, or 0.0 when stats are unavailable
    """
    if stats is None:
        return 0.0

    agreement = read_field(response, "agreement")
    importance = read_field(response, "importance")
    if agreement is None or importance is None:
        raise MalformedCollectionError(
            "Response is missing agreement or importance", collection="response"
        )

    return float(np.hypot(
        float(agreement) - stats.avg_agreement,
        float(importance) - stats.avg_importance,
    ))


def classify_distance(distance: float, policy: str = CARD_POLICY) -> Tier:
    """Classify a distance under the named policy

    Raises:
        ValidationError: unknown policy name
    """
    bands, last = get_distance_policy(policy)
    return tier_below(distance, bands, last)
