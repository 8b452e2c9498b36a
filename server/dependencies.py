"""FastAPI Dependencies

Centralized dependency injection for reuse across all route modules.
"""

from typing import Optional

from fastapi import HTTPException, Request, status

from database.id_generation import validate_participant_id
from database.store import SessionStore

PARTICIPANT_HEADER = "X-Participant-ID"


def get_store(request: Request) -> SessionStore:
    """Dependency to get the shared session store from app state

    Usage in routes:
        @router.get("/endpoint")
        async def endpoint(store: SessionStore = Depends(get_store)):
            return store.get_questions()
    """
    return request.app.state.store


async def get_participant_id(request: Request) -> str:
    """Opaque participant id from the X-Participant-ID header

    The id is only used as an author key; its format carries no meaning
    beyond the character set checked here.

    Raises:
        HTTPException 401 if the header is missing
        HTTPException 400 if the id is not a usable key
    """
    participant_id = request.headers.get(PARTICIPANT_HEADER)
    if not participant_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Missing {PARTICIPANT_HEADER} header",
        )
    if not validate_participant_id(participant_id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid {PARTICIPANT_HEADER} header",
        )
    return participant_id


async def get_optional_participant_id(request: Request) -> Optional[str]:
    """Optional participant dependency - returns None when the header is absent

    A header that is present but malformed is still rejected with 400,
    same as on write endpoints.
    """
    if not request.headers.get(PARTICIPANT_HEADER):
        return None
    return await get_participant_id(request)
