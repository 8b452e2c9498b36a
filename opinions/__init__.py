"""Opinions module - statistics and aggregation over scalar opinions

Core engine for anonymous opinion polling:
- Per-question means, standard deviations and controversy tiers
- Distance between one respondent and the question mean
- Group cohesion and user alignment across answered questions
- Tag filtering and display ordering of questions
"""

from opinions.catalog import (
    SORT_KEYS,
    collect_tags,
    filter_by_tags,
    normalize_tags,
    scatter_points,
    sort_questions,
)
from opinions.cohesion import GroupStats, classify_cohesion, compute_group_stats
from opinions.distance import classify_distance, compute_distance
from opinions.statistics import QuestionStats, classify_controversy, compute_question_stats
from opinions.tiers import ALIGNMENT_POLICY, CARD_POLICY, DISTANCE_POLICIES, Tier

__all__ = [
    "ALIGNMENT_POLICY",
    "CARD_POLICY",
    "DISTANCE_POLICIES",
    "GroupStats",
    "QuestionStats",
    "SORT_KEYS",
    "Tier",
    "classify_cohesion",
    "classify_controversy",
    "classify_distance",
    "collect_tags",
    "compute_distance",
    "compute_group_stats",
    "compute_question_stats",
    "filter_by_tags",
    "normalize_tags",
    "scatter_points",
    "sort_questions",
]
