"""
ID Generation - identifiers for questions, responses and participants

Entity ID Patterns:
- Question ID: q_{token} - e.g., "q_Zx81kPq0aW3s"
- Response ID: r_{token} - e.g., "r_4fGh0PlmQ2vy"
- Participant ID: user_{token} - e.g., "user_k3J9qT0bV1xe8s2L"

Participant ids are opaque author keys. Nothing downstream parses them;
validate_participant_id only bounds their size and character set.
"""

import re
import secrets

PARTICIPANT_ID_PATTERN = re.compile(r"^[A-Za-z0-9_\-]{1,128}$")


def generate_question_id() -> str:
    return f"q_{secrets.token_urlsafe(9)}"


def generate_response_id() -> str:
    return f"r_{secrets.token_urlsafe(9)}"


def generate_participant_id() -> str:
    """New anonymous participant id for a browser session"""
    return f"user_{secrets.token_urlsafe(12)}"


def validate_participant_id(participant_id: str) -> bool:
    """Check a client-supplied participant id is usable as a key

    Examples:
        >>> validate_participant_id("user_abc123")
        True
        >>> validate_participant_id("demo1")
        True
        >>> validate_participant_id("has space")
        False
    """
    if not participant_id:
        return False
    return bool(PARTICIPANT_ID_PATTERN.match(participant_id))
