"""Question catalog helpers: tags, filtering, sorting, scatter points

These sit between the store and the rendering layer. Like the statistics
functions they are pure and operate on whatever snapshot is passed in.
"""

from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Optional

from exceptions import ValidationError
from opinions.statistics import QuestionStats, read_field

SORT_BY_DATE = "date"
SORT_BY_IMPORTANCE = "importance"
SORT_BY_CONTROVERSY = "controversy"
SORT_KEYS = (SORT_BY_DATE, SORT_BY_IMPORTANCE, SORT_BY_CONTROVERSY)

# Mean point shown when a question has no responses yet
DEFAULT_MEAN_POINT = 50.0


def normalize_tags(tags: Optional[Iterable[str]]) -> List[str]:
    """Trim, lower-case and de-duplicate tags, keeping first occurrence order

    Examples:
        >>> normalize_tags([" Cuisine", "cuisine", "", "Pizza "])
        ['cuisine', 'pizza']
    """
    if not tags:
        return []

    seen = set()
    result = []
    for tag in tags:
        normalized = str(tag).strip().lower()
        if normalized and normalized not in seen:
            seen.add(normalized)
            result.append(normalized)
    return result


def collect_tags(questions: Iterable[Any]) -> List[str]:
    """Sorted unique tags across all questions"""
    tags = set()
    for question in questions:
        tags.update(read_field(question, "tags") or [])
    return sorted(tags)


def filter_by_tags(questions: Iterable[Any], selected: Optional[Iterable[str]]) -> List[Any]:
    """Questions sharing at least one selected tag; all of them when nothing is selected"""
    selected_set = set(normalize_tags(selected))
    questions = list(questions)
    if not selected_set:
        return questions
    return [
        q for q in questions
        if selected_set.intersection(read_field(q, "tags") or [])
    ]


def sort_questions(
    questions: Iterable[Any],
    sort_by: str,
    stats_for: Callable[[Any], Optional[QuestionStats]],
) -> List[Any]:
    """Order questions for display

    Args:
        questions: Questions to order
        sort_by: "date" (newest first), "importance" (highest mean
                 importance first) or "controversy" (highest global
                 standard deviation first)
        stats_for: Callable returning stats for a question id, or None

    Returns:
        New sorted list. Questions without stats go last; ties keep
        their input order.

    Raises:
        ValidationError: unknown sort key
    """
    questions = list(questions)

    if sort_by == SORT_BY_DATE:
        return sorted(questions, key=_created_at, reverse=True)

    if sort_by == SORT_BY_IMPORTANCE:
        metric = "avg_importance"
    elif sort_by == SORT_BY_CONTROVERSY:
        metric = "std_dev_global"
    else:
        raise ValidationError(
            f"Invalid sort. Must be one of: {list(SORT_KEYS)}",
            field="sort",
            value=sort_by,
        )

    with_stats = []
    without_stats = []
    for question in questions:
        stats = stats_for(read_field(question, "id"))
        if stats is None:
            without_stats.append(question)
        else:
            with_stats.append((getattr(stats, metric), question))

    with_stats.sort(key=lambda pair: pair[0], reverse=True)
    return [q for _, q in with_stats] + without_stats


def scatter_points(
    responses: Iterable[Any],
    stats: Optional[QuestionStats],
    current_user_id: Optional[str],
) -> List[Dict[str, Any]]:
    """Points for the agreement/importance scatter plot

    One point per response plus a final mean point. The mean point sits
    at (50, 50) when the question has no stats.
    """
    points = [
        {
            "x": float(read_field(r, "agreement")),
            "y": float(read_field(r, "importance")),
            "is_user": current_user_id is not None and read_field(r, "author_id") == current_user_id,
            "is_average": False,
        }
        for r in responses
    ]

    points.append({
        "x": stats.avg_agreement if stats else DEFAULT_MEAN_POINT,
        "y": stats.avg_importance if stats else DEFAULT_MEAN_POINT,
        "is_user": False,
        "is_average": True,
    })
    return points


def _created_at(question: Any) -> datetime:
    return read_field(question, "created_at") or datetime.min
