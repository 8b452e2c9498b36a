"""Standardized API response helpers.

All successful responses include {"success": True, ...}
"""


def success_response(data: dict, **extras) -> dict:
    """Standard success response wrapper.

    Usage:
        return success_response({"question": question.to_dict()})

    Returns:
        {"success": True, **data, **extras}
    """
    return {"success": True, **data, **extras}


def list_response(items: list, key: str = "items", **extras) -> dict:
    """Standard list response with total count.

    Usage:
        return list_response(questions, key="questions", tags=all_tags)

    Returns:
        {"success": True, key: items, "total": N, **extras}
    """
    return {
        "success": True,
        key: items,
        "total": len(items),
        **extras
    }
