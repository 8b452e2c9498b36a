"""Builders shared by the engine test modules"""


def make_response(agreement, importance, author_id="u1", question_id="q1"):
    """Plain mapping response; the engine reads mappings and objects alike"""
    return {
        "question_id": question_id,
        "author_id": author_id,
        "agreement": agreement,
        "importance": importance,
    }
